"""Error response builder for RFC 9457 Problem Details.

Builds RFC 9457 compliant error responses from application layer errors.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 9457 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from capgate.application.errors import ApplicationError, ApplicationErrorCode
from capgate.core.config import settings
from capgate.domain.errors import MissingParameterError
from capgate.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_CODES: dict[ApplicationErrorCode, int] = {
    ApplicationErrorCode.NOT_AVAILABLE: status.HTTP_404_NOT_FOUND,
    ApplicationErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ApplicationErrorCode.MISSING_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ApplicationErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ApplicationErrorCode.HANDLER_FAILED: status.HTTP_502_BAD_GATEWAY,
    ApplicationErrorCode.HANDLER_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ApplicationErrorCode.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_TITLES: dict[ApplicationErrorCode, str] = {
    ApplicationErrorCode.NOT_AVAILABLE: "Not Available",
    ApplicationErrorCode.FORBIDDEN: "Access Denied",
    ApplicationErrorCode.MISSING_PARAMETER: "Missing Parameter",
    ApplicationErrorCode.COMMAND_VALIDATION_FAILED: "Validation Failed",
    ApplicationErrorCode.CONFLICT: "Resource Conflict",
    ApplicationErrorCode.HANDLER_FAILED: "Action Failed",
    ApplicationErrorCode.HANDLER_TIMEOUT: "Action Timed Out",
    ApplicationErrorCode.SERVICE_UNAVAILABLE: "Service Unavailable",
}


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> error = from_domain_error(result.error)
        >>> response = ErrorResponseBuilder.from_application_error(
        ...     error=error,
        ...     request=request,
        ...     trace_id=get_trace_id() or "",
        ... )
    """

    @staticmethod
    def from_application_error(
        error: ApplicationError,
        request: Request,
        trace_id: str,
    ) -> JSONResponse:
        """Convert ApplicationError to RFC 9457 JSON response.

        Field-level errors are attached only for validation and missing
        parameter failures; a NOT_AVAILABLE answer never carries details
        that distinguish its causes.

        Args:
            error: Application layer error to convert
            request: FastAPI Request object (for instance URL)
            trace_id: Request trace ID for debugging

        Returns:
            JSONResponse with RFC 9457 ProblemDetails content
        """
        status_code = ErrorResponseBuilder.get_status_code(error.code)

        problem = ProblemDetails(
            type=f"{settings.api_v1_prefix}/errors/{error.code.value}",
            title=_TITLES.get(error.code, "Internal Server Error"),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            errors=ErrorResponseBuilder._field_errors(error),
            trace_id=trace_id or None,
        )

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
        )

    @staticmethod
    def get_status_code(code: ApplicationErrorCode) -> int:
        """Map application error code to HTTP status code."""
        return _STATUS_CODES.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def _field_errors(error: ApplicationError) -> list[ErrorDetail] | None:
        domain_error = error.domain_error
        if domain_error is None:
            return None

        if isinstance(domain_error, MissingParameterError):
            return [
                ErrorDetail(
                    field=name,
                    code=domain_error.code.value,
                    message=f"Parameter {name!r} is required",
                )
                for name in domain_error.missing or (domain_error.parameter,)
            ]

        if error.code == ApplicationErrorCode.COMMAND_VALIDATION_FAILED:
            field = getattr(domain_error, "field", None)
            return [
                ErrorDetail(
                    field=field or "unknown",
                    code=domain_error.code.value,
                    message=domain_error.message,
                )
            ]

        return None
