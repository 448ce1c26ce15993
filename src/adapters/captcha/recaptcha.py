"""
reCAPTCHA verifier adapter - Implements BotVerifier protocol.

Posts the client token to the siteverify endpoint with httpx and turns the
response into a VerificationOutcome. Transport problems never escape as
exceptions: a check that cannot run is a failed check.
"""

import logging

import httpx

from src.domain.ports import FailureReason, VerificationOutcome

logger = logging.getLogger(__name__)

DEFAULT_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


class RecaptchaVerifier:
    """
    Implements BotVerifier protocol against Google reCAPTCHA (v2 or v3).

    Uses structural subtyping - no explicit inheritance from Protocol.
    With no secret configured the verifier runs in bypass mode and every
    token passes with score 1.0.
    """

    def __init__(
        self,
        secret: str | None,
        min_score: float = 0.5,
        verify_url: str = DEFAULT_VERIFY_URL,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Args:
            secret: Server-side reCAPTCHA secret; empty or None enables bypass
            min_score: Lowest acceptable v3 score (inclusive)
            verify_url: siteverify endpoint
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (tests inject a mock transport)
        """
        self._secret = secret or ""
        self._min_score = min_score
        self._verify_url = verify_url
        self._timeout = timeout
        self._client = client

    @property
    def enabled(self) -> bool:
        return bool(self._secret)

    def verify(self, token: str | None, client_address: str | None = None) -> VerificationOutcome:
        """
        Verify a token with a single request, no retry.

        Decision rule: fail unless ``success`` is explicitly true, then fail
        if a numeric ``score`` is present and below ``min_score``.
        """
        if not self.enabled:
            return VerificationOutcome(passed=True, score=1.0)

        data = {"secret": self._secret, "response": token or ""}
        if client_address:
            data["remoteip"] = client_address

        try:
            body = self._post(data)
        except (httpx.HTTPError, ValueError) as e:
            logger.error("reCAPTCHA verify error: %s", e)
            return VerificationOutcome(passed=False, reason=FailureReason.TRANSPORT_ERROR)

        raw_codes = body.get("error-codes")
        error_codes = tuple(str(code) for code in raw_codes) if isinstance(raw_codes, list) else ()
        score = body.get("score")
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            score = None

        if body.get("success") is not True:
            logger.warning("reCAPTCHA rejected token: error-codes=%s", list(error_codes))
            return VerificationOutcome(
                passed=False,
                score=score,
                reason=FailureReason.UNSUCCESSFUL,
                error_codes=error_codes,
            )

        if score is not None and score < self._min_score:
            logger.warning("reCAPTCHA score %.2f below threshold %.2f", score, self._min_score)
            return VerificationOutcome(
                passed=False,
                score=score,
                reason=FailureReason.LOW_SCORE,
                error_codes=error_codes,
            )

        return VerificationOutcome(passed=True, score=score, error_codes=error_codes)

    def _post(self, data: dict[str, str]) -> dict:
        if self._client is not None:
            response = self._client.post(self._verify_url, data=data, timeout=self._timeout)
        else:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(self._verify_url, data=data)
        response.raise_for_status()
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError(f"unexpected siteverify body: {body!r}")
        return body
