# Custom exceptions for wwwrite

from typing import Optional


class WwwriteError(Exception):
    """Base exception for all application-specific errors."""
    pass

class ParseError(WwwriteError):
    """Raised when source text cannot be parsed by tree-sitter."""
    def __init__(
        self,
        file_path: str,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.file_path = file_path
        self.message = message
        self.line = line
        self.column = column
        location = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(f"Failed to parse {file_path}{location}: {message}")

class SerializationError(WwwriteError):
    """Raised when an edited tree cannot be re-emitted as consistent text."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to serialize {file_path}: {message}")

class GrammarNotFoundError(WwwriteError):
    """Raised when a required tree-sitter grammar is not found."""
    def __init__(self, dialect: str, install_command: str):
        self.dialect = dialect
        self.install_command = install_command
        super().__init__(
            f"Grammar for '{dialect}' not found. Install it with: {install_command}"
        )

class ConfigError(WwwriteError):
    """Raised for configuration-related problems."""
    pass

class PackageMetadataError(WwwriteError):
    """Raised when a package.json cannot be read or lacks required fields."""
    def __init__(self, package_path: str, message: str):
        self.package_path = package_path
        self.message = message
        super().__init__(f"Invalid package metadata in {package_path}: {message}")
