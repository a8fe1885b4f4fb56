"""Domain exceptions raised by the read and write services.

None of them is retried inside the services; the HTTP layer maps each one to a
status code.
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""


class NotFoundError(CatalogError):
    """No record matches an identity, criteria set or page.

    Also raised for criteria that name unknown fields, so a malformed search
    looks the same as one that matched nothing.
    """


class NameExistsError(CatalogError):
    def __init__(self, name):
        super().__init__(f"hardware name {name!r} already exists")
        self.name = name


class VersionInvalidError(CatalogError):
    def __init__(self, version):
        super().__init__(f"version {version!r} is invalid")
        self.version = version


class VersionOutdatedError(CatalogError):
    def __init__(self, version):
        super().__init__(f"version {version} is outdated")
        self.version = version
