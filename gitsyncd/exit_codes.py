"""
Standard exit codes and fatal error types for gitsyncd.

Following Unix/POSIX conventions for command-line tools.
"""
# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors, including every fatal startup error
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)


class GitSyncError(Exception):
    """
    Base error carrying the exit code the process should terminate with.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class InvalidRepositoryError(GitSyncError):
    """Raised when the path holds no repository and no bootstrap URL was given."""
    def __init__(self, message: str = "no valid repository found in the specified path"):
        super().__init__(message, GENERAL_ERROR)


class BootstrapError(GitSyncError):
    """Raised when the working copy could not be created by cloning."""
    def __init__(self, message: str):
        super().__init__(message, GENERAL_ERROR)


class ConfigError(GitSyncError):
    """Raised when the configuration is missing or malformed; fatal at startup."""
    def __init__(self, message: str):
        super().__init__(message, GENERAL_ERROR)
