from ...domain.entities import User, Rol
from ...domain.errors import InvalidRole, SelfDeletion
from .authenticate_user import IUserRepository, IPasswordHasher


def parse_rol(value: str) -> Rol:
    """Upper-case and validate a role name coming from a request body."""
    try:
        return Rol(value.strip().upper())
    except ValueError:
        raise InvalidRole(f"Unknown role {value!r}. Expected one of: "
                          + ", ".join(r.value for r in Rol))


class CreateUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, nombre: str, email: str, password: str, rol: str,
                curso: str | None = None) -> User:
        role = parse_rol(rol)
        return self.repo.create(nombre, email, self.hasher.hash(password), role, curso or None)


class UpdateOwnProfile:
    """Self-service edit: name, email and optionally the password. Role and course stay put."""

    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, user_id: int, nombre: str, email: str, password: str | None = None) -> User:
        fields = {"nombre": nombre, "email": email}
        if password:
            fields["clave"] = self.hasher.hash(password)
        return self.repo.update(user_id, **fields)


class UpdateUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, user_id: int, nombre: str, email: str, rol: str,
                curso: str | None = None, password: str | None = None) -> User:
        fields = {"nombre": nombre, "email": email, "rol": parse_rol(rol), "curso": curso or None}
        if password:
            fields["clave"] = self.hasher.hash(password)
        return self.repo.update(user_id, **fields)


class DeleteUser:
    def __init__(self, repo: IUserRepository):
        self.repo = repo

    def execute(self, caller_id: int, user_id: int) -> None:
        # admins may not remove their own account
        if caller_id == user_id:
            raise SelfDeletion("You cannot delete your own administrator account.")
        self.repo.delete(user_id)
