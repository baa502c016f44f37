from chatroom.application.common.results import ErrorKind, ServiceError, ServiceResult

__all__ = ["ErrorKind", "ServiceError", "ServiceResult"]
