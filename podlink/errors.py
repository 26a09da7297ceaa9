class ConfigurationError(Exception):
    """A dependency declaration or link file that cannot be honoured as written.

    Raised for every user-facing problem (missing targets, unreadable
    projects, missing workspace) and never retried; the message names the
    offending target, project and declaring file so it can be fixed by hand.
    """
