"""
Operation Result

Structured outcome of a service operation: `{success, data}` on success or
`{success, error_kind, error_detail}` on failure. Both the HTTP exception handlers and
non-HTTP callers build results through this type so the shape is defined once.
"""

from typing import Any, Optional

import attrs

from src.platform.exception.exceptions import CustomBaseError, InternalError


@attrs.define(frozen=True)
class OperationResult:
    success: bool
    data: Any = None
    error_kind: Optional[str] = None
    error_detail: Optional[str] = None
    extra: dict[str, Any] = attrs.field(factory=dict)

    @classmethod
    def ok(cls, data: Any) -> 'OperationResult':
        return cls(success=True, data=data)

    @classmethod
    def from_error(cls, error: Exception) -> 'OperationResult':
        # Unclassified failures never leak their message
        if not isinstance(error, CustomBaseError):
            error = InternalError()
        return cls(
            success=False,
            error_kind=error.kind,
            error_detail=error.message,
            extra=error.detail(),
        )

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {'success': True, 'data': self.data}
        return {
            'success': False,
            'error_kind': self.error_kind,
            'error_detail': self.error_detail,
            **self.extra,
        }
