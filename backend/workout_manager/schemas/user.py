from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints

UsernameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
# bcrypt only looks at the first 72 bytes
PasswordStr = Annotated[str, Field(min_length=1, max_length=72)]

class UserRegister(BaseModel):
    username: UsernameStr
    password: PasswordStr

class UserLogin(BaseModel):
    username: UsernameStr
    password: PasswordStr

class MessageRead(BaseModel):
    message: str

class LoginRead(MessageRead):
    username: str
