from ...domain.entities import User, Rol
from ...domain.errors import InvalidCredentials

class IUserRepository:
    def get_by_email(self, email: str) -> User | None: ...
    def get_with_hash(self, email: str) -> tuple[User, str] | None: ...
    def list_users(self, rol: Rol | None = None) -> list[User]: ...
    def create(self, nombre: str, email: str, password_hash: str, rol: Rol, curso: str | None) -> User: ...
    def update(self, user_id: int, **fields) -> User: ...
    def delete(self, user_id: int) -> None: ...

class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...

class AuthenticateUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, email: str, password: str) -> User:
        # unknown email and wrong password must be indistinguishable to the caller
        found = self.repo.get_with_hash(email)
        if found is None:
            raise InvalidCredentials("Incorrect email or password.")
        user, password_hash = found
        if not self.hasher.verify(password, password_hash):
            raise InvalidCredentials("Incorrect email or password.")
        return user
