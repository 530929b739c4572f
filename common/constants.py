BASE_URL      = "https://v3.football.api-sports.io"
API_HOST      = "v3.football.api-sports.io"
DATE_FORMAT   = "%Y-%m-%d"
HTTP_TIMEOUT  = (10, 20)        # (connect, read) seconds

MATCHES_PER_PAGE  = 10
SUGGESTION_LIMIT  = 10
FUZZY_THRESHOLD   = 0.2         # 0 = exact only, 1 = match anything
ALL_LEAGUES_LABEL = "All Leagues"

# Text fields a fuzzy query is matched against
FIXTURE_SEARCH_KEYS = ("home.name", "away.name", "league_name", "label")
LEAGUE_SEARCH_KEYS  = ("name",)
