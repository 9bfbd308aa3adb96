from passlib.context import CryptContext

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)

def verify_password(plain: str, hashed: str) -> bool:
    return pwd_ctx.verify(plain, hashed)

def burn_verify() -> None:
    """
    Spend the time of one real verify when there is no user to check against,
    so 'unknown user' and 'wrong password' take about as long.
    """
    pwd_ctx.dummy_verify()
