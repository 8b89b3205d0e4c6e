"""
Unit Tests for domain exceptions
"""
import pytest

from apkstudio.core.exceptions import (
    AIProviderConfigError,
    AIServiceError,
    ApkStudioError,
    BuildNotFoundError,
    FileTooLargeError,
    InvalidBuildTransitionError,
    InvalidFileTypeError,
    ProjectNotFoundError,
    UnknownAIActionError,
    UnknownAIProviderError,
    ValidationError,
    error_response,
)


class TestStatusCodes:

    @pytest.mark.parametrize("error,status_code", [
        (ProjectNotFoundError("p"), 404),
        (BuildNotFoundError("p"), 404),
        (ValidationError("bad"), 400),
        (InvalidFileTypeError("a.exe", ".exe", [".py"]), 400),
        (UnknownAIActionError("x"), 400),
        (UnknownAIProviderError("x", ["openai"]), 400),
        (AIProviderConfigError("openai", "key"), 400),
        (FileTooLargeError("big.zip", 100, 10), 413),
        (InvalidBuildTransitionError("p", "no"), 409),
        (AIServiceError("openai", "down"), 502),
        (ApkStudioError("boom"), 500),
    ])
    def test_status_code(self, error, status_code):
        assert error.status_code == status_code
        assert isinstance(error, ApkStudioError)


class TestErrorResponse:

    def test_error_response_shape(self):
        body = error_response(ProjectNotFoundError("abc"))

        assert body == {
            "detail": "Project with ID 'abc' not found",
            "success": False,
            "error": {
                "code": "PROJECT_NOT_FOUND",
                "message": "Project with ID 'abc' not found",
                "details": {"resource_type": "Project", "resource_id": "abc"},
            },
        }

    def test_ai_service_error_without_upstream_status(self):
        error = AIServiceError("custom", "connection refused")

        assert error.details == {"provider": "custom"}

    def test_validation_field(self):
        assert ValidationError("bad", field="files").details == {"field": "files"}
