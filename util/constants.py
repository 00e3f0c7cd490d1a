class InternalURIs:
    HEALTHZ = "/healthz"
    ENCODE = "/encode"
    QUERY = "/query"


class Limits:
    ID_MAX = 100
    ID_PATTERN = r"^[A-Za-z0-9_-]+$"
    TEXT_MAX = 10_000
    PROMPT_MAX = 1_000
