
class RGWFSError(Exception):
    """Super-type of all errors raised by rgwfs code"""

    def __init__(self, msg: str, code_space: str = "GEN", code_number: int = None, is_recoverable: bool = False):
        self.internal_code = "" if code_number is None else f"{code_space}-{code_number}"
        super().__init__(f"{msg} [{self.internal_code}]")
        self.is_recoverable = is_recoverable


class StorageError(RGWFSError):
    """Error class for failures of the object storage backend."""

    def __init__(self, msg, code, is_recoverable: bool = False):
        super().__init__(msg, "STORAGE", code, is_recoverable=is_recoverable)


class PathNotFoundError(RGWFSError):
    """No object exists under the key derived from a path."""

    def __init__(self, msg, code: int = 1000):
        super().__init__(msg, "FS", code)


class PathExistsError(RGWFSError):
    """A file occupies a position where a directory is needed, or vice versa."""

    def __init__(self, msg, code: int = 1100):
        super().__init__(msg, "FS", code)


class PathNotEmptyError(RGWFSError):

    def __init__(self, msg, code: int = 1200):
        super().__init__(msg, "FS", code)


class CapacityExceededError(RGWFSError):
    """A multi-object operation would touch more objects than it is allowed to."""

    def __init__(self, msg, code: int = 1300):
        super().__init__(msg, "FS", code)


class UnsupportedOperationError(RGWFSError):

    def __init__(self, msg, code: int = 1400):
        super().__init__(msg, "FS", code)


class InvalidPathError(RGWFSError):

    def __init__(self, msg, code: int = 1500):
        super().__init__(msg, "FS", code)


class AuthenticationError(RGWFSError):
    """Account or session bootstrap against the backend failed."""

    def __init__(self, msg, code: int = 3000):
        super().__init__(msg, "AUTH", code)


class ConfigurationError(RGWFSError):

    def __init__(self, msg, code: int = 4000):
        super().__init__(msg, "CONFIG", code)
