"""
Custom Exceptions for APK Studio
================================

Use these instead of generic Exception to:
1. Make errors more specific and debuggable
2. Enable proper error handling at API layer
3. Provide meaningful error messages to users

Every exception carries the HTTP status the API layer answers with.

Usage:
    from apkstudio.core.exceptions import ProjectNotFoundError

    if not project:
        raise ProjectNotFoundError(project_id)
"""

from typing import Optional, Any, Dict, List


class ApkStudioError(Exception):
    """Base exception for all APK Studio errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(ApkStudioError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class ProjectNotFoundError(ResourceNotFoundError):
    """Project not found"""

    def __init__(self, project_id: str):
        super().__init__("Project", project_id)


class ProjectFileNotFoundError(ResourceNotFoundError):
    """File not found"""

    def __init__(self, file_id: str):
        super().__init__("File", file_id)


class BuildNotFoundError(ResourceNotFoundError):
    """No build has ever been started for the project"""

    def __init__(self, project_id: str):
        super().__init__("Build", project_id)
        self.message = f"No build found for project '{project_id}'"


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(ApkStudioError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class InvalidFileTypeError(ValidationError):
    """File type not allowed"""

    def __init__(self, file_name: str, file_type: str, allowed_types: List[str]):
        super().__init__(
            f"File type '{file_type}' not supported for '{file_name}'. "
            f"Allowed: {', '.join(allowed_types)}"
        )
        self.code = "INVALID_FILE_TYPE"
        self.details = {"file_name": file_name, "file_type": file_type, "allowed_types": allowed_types}


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds the size limit"""

    status_code = 413

    def __init__(self, file_name: str, size: int, max_size: int):
        super().__init__(
            f"File '{file_name}' is too large ({size} bytes). Maximum size is {max_size // 1024 // 1024}MB"
        )
        self.code = "FILE_TOO_LARGE"
        self.details = {"file_name": file_name, "size_bytes": size, "max_size_bytes": max_size}


class UnknownAIActionError(ValidationError):
    """AI editor action not supported"""

    def __init__(self, action: str):
        super().__init__(f"Unknown action '{action}'", field="action")
        self.code = "UNKNOWN_AI_ACTION"


# ============================================
# Build Errors
# ============================================

class InvalidBuildTransitionError(ApkStudioError):
    """A build step tried to move progress backwards or touch a finished build"""

    status_code = 409

    def __init__(self, project_id: str, message: str):
        super().__init__(
            message,
            code="INVALID_BUILD_TRANSITION",
            details={"project_id": project_id}
        )


# ============================================
# AI Provider Errors
# ============================================

class AIServiceError(ApkStudioError):
    """Upstream AI provider failed"""

    status_code = 502

    def __init__(self, provider: str, message: str, upstream_status: Optional[int] = None):
        super().__init__(message, code="AI_SERVICE_ERROR", details={"provider": provider})
        if upstream_status is not None:
            self.details["upstream_status"] = upstream_status


class UnknownAIProviderError(ApkStudioError):
    """AI provider name not recognised"""

    status_code = 400

    def __init__(self, provider: Optional[str], supported: List[str]):
        super().__init__(
            f"Unknown AI provider '{provider}'",
            code="UNKNOWN_AI_PROVIDER",
            details={"provider": provider, "supported": supported}
        )


class AIProviderConfigError(ApkStudioError):
    """Provider configuration is incomplete (missing API key or endpoint)"""

    status_code = 400

    def __init__(self, provider: str, message: str):
        super().__init__(message, code="AI_PROVIDER_CONFIG_ERROR", details={"provider": provider})


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: ApkStudioError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "detail": error.message,
        "success": False,
        "error": error.to_dict()
    }
