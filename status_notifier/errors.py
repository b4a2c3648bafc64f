
# Failures that end a run with a non-zero exit status.
#
# Anything that goes wrong while enriching a single entry, or while reading
# the previous state file, is recovered where it happens and never surfaces
# as one of these.


class NotifierError(Exception):
    """Base class for fatal errors raised by the notifier pipeline."""


class ConfigError(NotifierError):
    """Required configuration is missing or invalid."""


class SummaryFetchError(NotifierError):
    """The summary document could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Fetch summary.json failed: {reason} ({url})")
        self.url = url
        self.reason = reason


class WebhookDeliveryError(NotifierError):
    """The chat webhook answered with a non-success status."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Discord webhook failed: {status} {body}".rstrip())
        self.status = status
        self.body = body
