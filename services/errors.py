"""Error taxonomy shared by the stores, the session and the lead search."""


class ValidationError(Exception):
    """User input problem. Recoverable, shown to the user as-is."""


class DuplicateAccount(ValidationError):
    def __init__(self, email: str):
        super().__init__("An account with this email already exists. Please log in.")
        self.email = email


class InvalidCredentials(ValidationError):
    def __init__(self):
        super().__init__("Invalid email or password.")


class NotAuthenticated(ValidationError):
    def __init__(self):
        super().__init__("Not authenticated")


class EmptySelection(ValidationError):
    def __init__(self):
        super().__init__("Please select at least one profile to search for leads.")


class MissingProfileName(ValidationError):
    def __init__(self):
        super().__init__("Please provide a name for the profile.")


class LeadSearchError(Exception):
    """Anything that stops a lead search from producing a list of leads."""


class BackendUnavailable(LeadSearchError):
    pass


class MalformedResponse(LeadSearchError):
    pass


class InvalidResponseShape(LeadSearchError):
    pass


class SessionChanged(LeadSearchError):
    def __init__(self):
        super().__init__("The session changed while the search was running; its leads were discarded.")


class StorageError(Exception):
    """Durable read/write failure. Logged by the stores, never fatal."""
