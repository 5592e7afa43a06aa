class LibraryError(Exception):
    """Base class for every error raised by the library core"""
    pass


class ValidationError(LibraryError, ValueError):
    """Input rejected before any state was touched"""
    pass


class NotFoundError(LibraryError, LookupError):
    """No book with the requested ISBN"""

    def __init__(self, isbn: str):
        super().__init__(f"Book with ISBN {isbn} not found.")
        self.isbn = isbn


class OutOfStockError(LibraryError):
    """The book exists but no copies are available"""

    def __init__(self, isbn: str):
        super().__init__(f"No copies of ISBN {isbn} are available.")
        self.isbn = isbn


class DecodeError(LibraryError):
    """A persisted document could not be turned into records"""
    pass


class StorageError(LibraryError):
    """Reading or writing a data file failed"""

    def __init__(self, path, cause: OSError):
        super().__init__(f"{path}: {cause.strerror or cause}")
        self.path = path
        self.cause = cause
