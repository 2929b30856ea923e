"""Public URL <-> object key mapping for https://storage.googleapis.com links."""

PUBLIC_BASE_URL = "https://storage.googleapis.com"


class UrlCodec:
    """Encodes keys as public URLs of one bucket; decodes them back."""

    def __init__(self, bucket_name: str, base_url: str = PUBLIC_BASE_URL) -> None:
        self.bucket_name = bucket_name
        self.base_url = base_url.rstrip("/")

    @property
    def prefix(self) -> str:
        return f"{self.base_url}/{self.bucket_name}/"

    def encode(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def decode(self, url: str) -> str:
        """Object key for url. Anything not under this bucket's public prefix is taken as a raw key."""
        prefix = self.prefix
        if url.startswith(prefix):
            return url[len(prefix) :]
        return url
