"""
Client for the external bank authorization service
"""
import logging

import requests
from pydantic import ValidationError

from common.error_handling import ErrorCodes, ServiceError
from common.retry import BANK_RETRY_CONFIG, RetryConfig, retry_call
from common.schemas import Authorization, AuthorizationRequest
from common.settings import settings
from payment_service.context import PaymentContext

logger = logging.getLogger(__name__)

class BankAuthorService:
    """
    Asks the bank to authorize a payment.

    authorize() records the call on the context: bank_called is set as soon as
    the bank is contacted, authorized and author_id once it answers. Transport
    failures are retried per retry_config; when they persist, or the bank
    answers with an error status, ServiceError is raised.
    """

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        retry_config: RetryConfig = None,
        http: requests.Session = None,
    ):
        self.base_url = (base_url or settings.bank_author_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.bank_timeout_seconds
        self.retry_config = retry_config or RetryConfig(
            max_attempts=settings.bank_max_attempts,
            base_delay=BANK_RETRY_CONFIG.base_delay,
            max_delay=BANK_RETRY_CONFIG.max_delay,
            retryable_exceptions=BANK_RETRY_CONFIG.retryable_exceptions,
        )
        self.http = http or requests.Session()

    def _post_authorization(self, request: AuthorizationRequest) -> requests.Response:
        response = self.http.post(
            f"{self.base_url}/authors/authorize",
            json=request.model_dump(),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response

    def authorize(self, context: PaymentContext) -> bool:
        request = AuthorizationRequest(
            merchant_id=context.pos_id,
            card_number=context.card_number,
            expiry_date=context.expiry_date,
            amount=context.amount,
        )
        context.bank_called = True

        try:
            response = retry_call(self._post_authorization, self.retry_config, request)
            authorization = Authorization.model_validate(response.json())
        except requests.exceptions.Timeout as e:
            raise ServiceError(ErrorCodes.TIMEOUT_ERROR, "Bank authorization timed out", original_error=e)
        except (requests.exceptions.RequestException, ValueError, ValidationError) as e:
            raise ServiceError(ErrorCodes.EXTERNAL_SERVICE_ERROR, "Bank authorization failed", original_error=e)

        context.authorized = authorization.authorized
        if authorization.authorized:
            context.author_id = authorization.author_id
        logger.info(f"Bank answered authorized={authorization.authorized} for POS {context.pos_id}", extra={
            "pos_id": context.pos_id,
            "amount": context.amount,
            "author_id": context.author_id,
        })
        return authorization.authorized
