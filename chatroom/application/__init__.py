"""
APPLICATION LAYER - Use cases over the domain

- services/ → MessageService, UserService (return a value or a ServiceError)
- dto/      → Pydantic models for request/response bodies
- common/   → ServiceError and the ServiceResult alias
"""
