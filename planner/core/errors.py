class PlannerError(Exception):
    pass


class NotFoundError(PlannerError):
    pass


class ValidationError(PlannerError):
    pass


class InsightError(PlannerError):
    kind = "request_failed"

    def __init__(self, message: str = "AI request failed, try again", detail: str | None = None):
        self.detail = detail
        super().__init__(message)


class MissingCredentialError(InsightError):
    kind = "credential"

    def __init__(self, detail: str | None = None):
        super().__init__("invalid or missing API key, check your provider config", detail)


class QuotaExceededError(InsightError):
    kind = "quota"

    def __init__(self, detail: str | None = None):
        super().__init__("provider rate limit or quota exceeded, try again later", detail)


class ProviderNetworkError(InsightError):
    kind = "network"

    def __init__(self, detail: str | None = None):
        super().__init__("network error reaching the AI provider", detail)


class MalformedResponseError(InsightError):
    kind = "malformed"

    def __init__(self, detail: str | None = None):
        super().__init__("AI provider returned an unreadable response", detail)
