"""Exception hierarchy for the discovery pipeline."""


class MdpError(Exception):
    """Base class for pipeline errors."""


class TaxonomyError(MdpError):
    """Raised when the concept taxonomy is inconsistent."""


class SnapshotError(MdpError):
    """Raised when a discovery snapshot cannot be read or parsed."""
