class MetadataError(Exception):
    """Base class for every error raised while reading instance metadata"""

    prefix = "Metadata Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class HttpRequestError(MetadataError):
    """The token request failed: connection error, timeout or non-2xx status"""

    prefix = "Http Request Error"


class IoError(MetadataError):
    """A response body could not be read as text"""

    prefix = "IO Error"


class NotFoundError(MetadataError):
    """A mandatory metadata path could not be fetched"""

    prefix = "Not found"

    def __init__(self, url: str):
        super().__init__(url)
        self.url = url


class JsonError(MetadataError):
    prefix = "JSON parsing error"


class UnknownAvailabilityZoneError(MetadataError):
    prefix = "Unknown AvailabilityZone"

    def __init__(self, availability_zone: str):
        super().__init__(availability_zone)
        self.availability_zone = availability_zone
