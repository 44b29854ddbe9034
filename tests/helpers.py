# User value: These helpers build sample artwork and stand in for Redis so tests run without live services.
import redis

from schemas.preflight import FileMetadata

MB = 1024 * 1024


def make_metadata(**overrides) -> FileMetadata:
    data = {
        "filename": "art.pdf",
        "file_format": "pdf",
        "file_size": 2 * MB,
        "width": 288,
        "height": 288,
        "dpi": 300,
        "color_space": "cmyk",
        "has_alpha": False,
        "bleed_present": True,
    }
    data.update(overrides)
    return FileMetadata(**data)


def make_bad_metadata() -> FileMetadata:
    return make_metadata(
        filename="flyer.jpg",
        file_format="jpg",
        color_space="rgb",
        dpi=100,
        bleed_present=False,
        has_transparency=True,
    )


class FakeRedis:
    def __init__(self, fail: bool = False):
        self.hashes: dict[str, dict[str, str]] = {}
        self.ttls: dict[str, int] = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")

    def hgetall(self, key):
        self._check()
        return dict(self.hashes.get(key, {}))

    def hset(self, key, mapping=None, **kwargs):
        self._check()
        bucket = self.hashes.setdefault(key, {})
        for k, v in (mapping or {}).items():
            bucket[k] = str(v)
        return len(mapping or {})

    def expire(self, key, seconds):
        self._check()
        self.ttls[key] = int(seconds)
        return key in self.hashes

    def ping(self):
        self._check()
        return True
