"""Classification prompt construction."""

from audience_tagger.core.entities import ClassificationRequest

SYSTEM_MESSAGE = "You are a movie analyst that determines the target audience for films."

PROMPT_TEMPLATE = """Analyze this movie and determine its TARGET AUDIENCE (not content rating).
Consider that target audience is different from content appropriateness:
- A PG movie from the 1970s might be targeted at adults despite being appropriate for children
- A PG-13 action movie might be targeted specifically at teenagers
- An unrated Christmas special might be clearly targeted at kids

Movie Information:
Title: {title}
Year: {year}
Official Rating: {rating}
Genres: {genres}
Overview: {overview}

Respond with ONLY ONE of these three options based on the PRIMARY target audience:
- kids (targeted at children, typically ages 2-11)
- teens (targeted at teenagers, typically ages 12-17)
- adults (targeted at mature audiences, ages 18+)

Consider:
1. The film's marketing and intended demographic
2. Themes and subject matter complexity
3. Historical context (pre-1990 PG and G films often targeted adults)
4. Whether it's a franchise aimed at kids/teens/adults
5. The sophistication level of storytelling

Respond with just one word: kids, teens, or adults"""


def build_prompt(request: ClassificationRequest) -> str:
    """Build the audience classification prompt for one item.
    
    Missing fields are rendered as placeholders so identical metadata
    always yields an identical prompt.
    """
    return PROMPT_TEMPLATE.format(
        title=request.title,
        year=request.year if request.year is not None else "Unknown",
        rating=request.official_rating if request.official_rating is not None else "Not Rated",
        genres=", ".join(request.genres) if request.genres else "Unknown",
        overview=request.overview if request.overview is not None else "No overview available",
    )
