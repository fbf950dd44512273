class InvalidCredentials(ValueError):
    pass


class EmailAlreadyInUse(ValueError):
    pass


class SelfDeletion(ValueError):
    pass


class UserNotFound(ValueError):
    pass


class InvalidRole(ValueError):
    pass
