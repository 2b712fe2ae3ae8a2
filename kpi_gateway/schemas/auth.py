from pydantic import BaseModel

# Fields stay optional so absence reaches the validator and becomes a 400
# with the localized message instead of a framework 422.


class RegisterRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None
