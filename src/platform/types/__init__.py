from src.platform.types.operation_result import OperationResult
from src.platform.types.uuid7_utils_types import UtilsUUID7

__all__ = ['OperationResult', 'UtilsUUID7']
