"""
Status Code Interpretation.

The CDN77 API reuses some status codes with endpoint-specific meaning: a 403
on purge-all means the feature is disabled for the resource, not that the
credentials are wrong, and a 404 on billing means no plan is active.

Interpretation is a two-tier lookup. Each command declares an ordered tuple
of StatusRule, checked first; if none matches, the shared default table
decides. The decision is made from the status code alone; the body is only
read by outcomes that include it in their message.

Usage:
    rules = (
        success_on(200),
        notice_on(404, "You do not have a PAYG tariff nor Monthly Plan active"),
    )
    outcome = check_status(response, rules)
    if outcome.kind is OutcomeKind.NOTICE:
        ...
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

import httpx

from cdn77_client.core.exceptions import (
    EXIT_CODE_API_EXPECTED_ERROR,
    EXIT_CODE_API_UNEXPECTED_ERROR,
    EXIT_CODE_OK,
    ExpectedApiError,
    UnexpectedApiError,
)

EMPTY_BODY_PLACEHOLDER = "FAILED TO READ RESPONSE, EMPTY?"


class OutcomeKind(str, Enum):
    """What a command does with a response."""

    SUCCESS = "success"
    NOTICE = "notice"
    EXPECTED_FAILURE = "expected_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"


@dataclass(frozen=True)
class StatusOutcome:
    """Result of interpreting a response status code."""

    kind: OutcomeKind
    message: str = ""
    status_code: int | None = None

    @property
    def exit_code(self) -> int:
        if self.kind is OutcomeKind.EXPECTED_FAILURE:
            return EXIT_CODE_API_EXPECTED_ERROR
        if self.kind is OutcomeKind.UNEXPECTED_FAILURE:
            return EXIT_CODE_API_UNEXPECTED_ERROR
        return EXIT_CODE_OK

    @property
    def is_failure(self) -> bool:
        return self.kind in (OutcomeKind.EXPECTED_FAILURE, OutcomeKind.UNEXPECTED_FAILURE)

    def raise_for_failure(self) -> None:
        """Raise the matching API error if this outcome is a failure."""
        if self.kind is OutcomeKind.EXPECTED_FAILURE:
            raise ExpectedApiError(self.message, status_code=self.status_code)
        if self.kind is OutcomeKind.UNEXPECTED_FAILURE:
            raise UnexpectedApiError(self.message, status_code=self.status_code)


@dataclass(frozen=True)
class StatusRule:
    """A command-specific rule: when `matches` accepts the status code, `resolve` decides."""

    matches: Callable[[int], bool]
    resolve: Callable[[httpx.Response], StatusOutcome]


def read_body_or_default(response: httpx.Response) -> str:
    """Return the response body as text, or a placeholder if it is empty or unreadable."""
    try:
        body = response.text
    except (httpx.ResponseNotRead, UnicodeDecodeError, LookupError):
        return EMPTY_BODY_PLACEHOLDER
    return body if body.strip() else EMPTY_BODY_PLACEHOLDER


def _code_in(codes: Sequence[int]) -> Callable[[int], bool]:
    accepted = frozenset(codes)
    return lambda status_code: status_code in accepted


def success_on(*codes: int) -> StatusRule:
    """Proceed to decoding when the status code is one of `codes`."""
    return StatusRule(
        matches=_code_in(codes),
        resolve=lambda response: StatusOutcome(OutcomeKind.SUCCESS, status_code=response.status_code),
    )


def notice_on(code: int, message: str) -> StatusRule:
    """Print an informational message and exit successfully."""
    return StatusRule(
        matches=_code_in((code,)),
        resolve=lambda response: StatusOutcome(OutcomeKind.NOTICE, message, response.status_code),
    )


def expected_failure_on(code: int, message: str, include_body: bool = False) -> StatusRule:
    """
    Report a documented negative outcome.

    With include_body, the response body (or a placeholder) is appended as
    "<message>: <body>".
    """

    def resolve(response: httpx.Response) -> StatusOutcome:
        text = f"{message}: {read_body_or_default(response)}" if include_body else message
        return StatusOutcome(OutcomeKind.EXPECTED_FAILURE, text, response.status_code)

    return StatusRule(matches=_code_in((code,)), resolve=resolve)


# =============================================================================
# Default interpretation
# =============================================================================

DEFAULT_STATUS_OUTCOMES: dict[int, StatusOutcome] = {
    401: StatusOutcome(
        OutcomeKind.EXPECTED_FAILURE,
        "Got 401/unauthorized. Please check your credentials.",
        401,
    ),
    403: StatusOutcome(
        OutcomeKind.EXPECTED_FAILURE,
        "Got 403/forbidden. Please check your credentials or the API operation args.",
        403,
    ),
    404: StatusOutcome(
        OutcomeKind.EXPECTED_FAILURE,
        "The requested resource was not found. Please validate your args.",
        404,
    ),
    405: StatusOutcome(
        OutcomeKind.UNEXPECTED_FAILURE,
        "Received 405/MethodNotAllowed. This might be an issue with an outdated client due to API changes.",
        405,
    ),
    422: StatusOutcome(
        OutcomeKind.UNEXPECTED_FAILURE,
        "Received 422/UnprocessableEntity. This might be an issue with this client, please check for an update.",
        422,
    ),
}
"""Status codes whose meaning is stable across all endpoints."""


def default_outcome(response: httpx.Response) -> StatusOutcome:
    """Interpret a status code no command-specific rule handled."""
    outcome = DEFAULT_STATUS_OUTCOMES.get(response.status_code)
    if outcome is not None:
        return outcome

    return StatusOutcome(
        OutcomeKind.UNEXPECTED_FAILURE,
        f"Received unexpected/unknown status code={response.status_code}, "
        f"please check the response for an explanation: {read_body_or_default(response)}",
        response.status_code,
    )


def interpret_status(response: httpx.Response, rules: Sequence[StatusRule] = ()) -> StatusOutcome:
    """
    Interpret a response status code.

    Command-specific rules are checked in order; the first match wins. If no
    rule matches, the default table decides.
    """
    for rule in rules:
        if rule.matches(response.status_code):
            return rule.resolve(response)
    return default_outcome(response)


def check_status(response: httpx.Response, rules: Sequence[StatusRule] = ()) -> StatusOutcome:
    """
    Interpret a response status code and raise on failure outcomes.

    Returns:
        A SUCCESS or NOTICE outcome

    Raises:
        ExpectedApiError: For documented negative outcomes (exit code 3)
        UnexpectedApiError: For anything this client does not understand (exit code 4)
    """
    outcome = interpret_status(response, rules)
    outcome.raise_for_failure()
    return outcome
