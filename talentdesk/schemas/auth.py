from pydantic import BaseModel


class RegisterRequest(BaseModel):
    # All optional at the shape level; the registration service owns the rules
    # so every rejection carries its own message.
    name: str | None = None
    email: str | None = None
    password: str | None = None
    company: str | None = None
    role: str | None = None  # hr / applicant (default)


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None
