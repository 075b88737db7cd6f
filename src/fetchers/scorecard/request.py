"""Query URL construction for the Scorecard schools endpoint."""

from urllib.parse import urlencode

from src.models.config import ScorecardConfig


# Commas separate the field list and dots appear in every field name
_SAFE_CHARS = ",."


def build_query_params(config: ScorecardConfig, year: int, page: int) -> dict[str, str]:
    """Build ordered query parameters for one page of one year."""
    fields = [
        *config.base_fields,
        config.earnings_key(year),
        config.default_rate_key(year),
    ]
    return {
        "sort": config.sort,
        "per_page": str(config.pagination.page_size),
        "page": str(page),
        "fields": ",".join(fields),
        "school.state": config.state,
        "api_key": config.api_key,
    }


def build_query_url(config: ScorecardConfig, year: int, page: int) -> str:
    """Build the full query URL for one page of one year.

    Example (wrapped):
        https://api.data.gov/ed/collegescorecard/v1/schools?sort=school.name
        &per_page=100&page=0&fields=id,school.name,school.state,
        2010.earnings...mean_earnings,2010.repayment.3_yr_default_rate
        &school.state=IL&api_key=KEY
    """
    query = urlencode(build_query_params(config, year, page), safe=_SAFE_CHARS)
    return f"{config.endpoint}?{query}"


def redact_url(url: str, api_key: str) -> str:
    """Replace the API key in a URL for logging and error messages."""
    if not api_key:
        return url
    return url.replace(urlencode({"api_key": api_key}, safe=_SAFE_CHARS), "api_key=***")
