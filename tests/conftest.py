"""Shared fixtures: fake Fabric servers, a controllable clock and sample artifacts."""

import gzip
import io
import json
import urllib.parse
import zipfile

import pytest
import requests

from yarnmappings.constants import Constants
from yarnmappings.models import ArtifactGeneration, VersionDescriptor

TINY_V1 = (
    "v1\tofficial\tintermediary\tnamed\n"
    "CLASS\ta\tnet/minecraft/class_1\tnet/minecraft/block/Block\n"
    "CLASS\tb\tnet/minecraft/class_2\tnet/minecraft/block/BlockState\n"
    "METHOD\ta\t()V\tc\tmethod_1\ttick\n"
    "FIELD\ta\tI\td\tfield_1\tblockState\n"
    "CLASS\te\tnet/minecraft/class_3\n"
)

TINY_V2 = (
    "tiny\t2\t0\tofficial\tintermediary\tnamed\n"
    "c\ta\tnet/minecraft/class_1\tnet/minecraft/block/Block\n"
    "\tm\t()V\tc\tmethod_1\ttick\n"
    "\t\tp\t1\t\t\tstate\n"
    "\tf\tI\td\tfield_1\tblockState\n"
    "c\tb\tnet/minecraft/class_2\tnet/minecraft/block/BlockState\n"
    "\tc\tA block state.\n"
    "c\te\tnet/minecraft/class_3\t\n"
)


def tiny_v1_bytes(text: str = TINY_V1) -> bytes:
    return gzip.compress(text.encode("utf-8"))


def mergedv2_bytes(text: str = TINY_V2) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as jar:
        jar.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        jar.writestr("mappings/mappings.tiny", text)
    return buf.getvalue()


def build_record(version: str, build: int) -> dict:
    return {
        "gameVersion": version,
        "separator": "+build.",
        "build": build,
        "maven": f"net.fabricmc:yarn:{version}+build.{build}",
        "version": f"{version}+build.{build}",
        "stable": True,
    }


class MockResponse:
    def __init__(self, status_code=200, data=None, content=b"", fail_after=None):
        self.status_code = status_code
        self.fail_after = fail_after
        self.content = json.dumps(data).encode("utf-8") if data is not None else content
        self.closed = False

    @property
    def text(self):
        return self.content.decode("utf-8")

    def json(self):
        return json.loads(self.text)

    def iter_content(self, chunk_size=1):
        body = self.content if self.fail_after is None else self.content[:self.fail_after]
        for i in range(0, len(body), chunk_size):
            yield body[i:i + chunk_size]
        if self.fail_after is not None:
            raise requests.ConnectionError("Connection reset by peer")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class FakeFabric:
    """Serves metadata and maven requests from in-memory tables."""

    def __init__(self):
        self.builds = {}
        self.artifacts = {}
        self.calls = []
        self.fail_meta = None
        self.interrupted = set()

    def publish(self, version, build, generation=ArtifactGeneration.V2, payload=None, v2_status=404):
        record = build_record(version, build)
        self.builds.setdefault(version, []).insert(0, record)
        descriptor = VersionDescriptor.from_dict(record)
        if payload is None:
            payload = mergedv2_bytes() if generation is ArtifactGeneration.V2 else tiny_v1_bytes()
        self.artifacts[descriptor.maven_url(Constants.MAVEN_URL, generation)] = (200, payload)
        if generation is ArtifactGeneration.V1:
            self.artifacts[descriptor.maven_url(Constants.MAVEN_URL, ArtifactGeneration.V2)] = (v2_status, b"")
        return descriptor

    def get(self, url, *, context, **kwargs):
        self.calls.append(url)
        if "/versions/mappings/" in url:
            if self.fail_meta is not None:
                raise self.fail_meta
            version = urllib.parse.unquote(url.rstrip("/").rsplit("/", 1)[-1])
            return MockResponse(200, data=self.builds.get(version, []))
        status, body = self.artifacts.get(url, (404, b""))
        if url in self.interrupted:
            return MockResponse(status, content=body, fail_after=len(body) // 2)
        return MockResponse(status, content=body)

    @property
    def meta_calls(self):
        return [u for u in self.calls if "/versions/mappings/" in u]

    @property
    def downloads(self):
        return [u for u in self.calls if "/versions/mappings/" not in u]


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def fabric(monkeypatch):
    """Route resolver and fetcher HTTP calls to a FakeFabric."""
    fake = FakeFabric()
    monkeypatch.setattr("yarnmappings.resolver.safe_get", fake.get)
    monkeypatch.setattr("yarnmappings.fetcher.safe_get", fake.get)
    return fake


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path / "yarn")


@pytest.fixture
def constants(monkeypatch):
    """Restore Constants tunables changed by config and CLI code under test."""
    for attr in ("DATA_DIR", "META_URL", "MAVEN_URL", "MAPPING_CACHE_TTL_SEC",
                 "REFRESH_INTERVAL_SEC", "REQUEST_TIMEOUT", "USER_AGENT"):
        monkeypatch.setattr(Constants, attr, getattr(Constants, attr))
    for env in (Constants.ENV_CONFIG, Constants.ENV_DATA_DIR, Constants.ENV_META_URL,
                Constants.ENV_MAVEN_URL):
        monkeypatch.delenv(env, raising=False)
    return Constants
