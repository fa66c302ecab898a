"""Data models for mapping entries, naming schemes and remote version records."""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class EntryKind(Enum):
    """Kind of symbol a mapping entry renames."""
    CLASS = "class"
    METHOD = "method"
    FIELD = "field"

    @classmethod
    def parse(cls, text: str) -> "EntryKind":
        """Look up a kind by value or member name, ignoring case."""
        key = text.strip().lower()
        for kind in cls:
            if key in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(f"Unknown entry kind: {text!r}")


class NamingScheme(Enum):
    """Parallel name spaces applied to the same symbol.

    The value is the namespace column name used in tiny mapping files.
    """
    OBFUSCATED = "official"
    INTERMEDIARY = "intermediary"
    NAMED = "named"

    def get(self, entry: "MappingEntry") -> Optional[str]:
        """Return the entry's name under this scheme, or None when absent."""
        value = getattr(entry, _SCHEME_FIELDS[self])
        return value or None

    @classmethod
    def from_namespace(cls, namespace: str) -> Optional["NamingScheme"]:
        """Map a tiny file namespace column to a scheme; unknown columns map to None."""
        for scheme in cls:
            if scheme.value == namespace:
                return scheme
        return None

    @classmethod
    def parse(cls, text: str) -> "NamingScheme":
        """Look up a scheme by namespace value or member name, ignoring case."""
        key = text.strip().lower()
        for scheme in cls:
            if key in (scheme.value, scheme.name.lower()):
                return scheme
        raise ValueError(f"Unknown naming scheme: {text!r}")


class MatchMode(Enum):
    """How query text is compared against a scheme's name."""
    EXACT = "exact"
    SUFFIX = "suffix"


def matches(mode: MatchMode, value: str, text: str) -> bool:
    """Apply a match mode.

    EXACT compares case-insensitively over the whole string, SUFFIX is a
    case-sensitive ``endswith`` test.
    """
    if mode is MatchMode.EXACT:
        return value.lower() == text.lower()
    if mode is MatchMode.SUFFIX:
        return value.endswith(text)
    raise ValueError(f"Unsupported match mode: {mode!r}")


class ArtifactGeneration(Enum):
    """Published mapping artifact formats, newest first."""
    V2 = ("mergedv2", "jar")
    V1 = ("tiny", "gz")

    @property
    def classifier(self) -> str:
        return self.value[0]

    @property
    def extension(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class MappingEntry:
    """One renamed class, method or field.

    ``owner`` and ``descriptor`` are only set for members and are expressed in
    the obfuscated namespace, as they appear in the mapping files.
    """
    kind: EntryKind
    obfuscated: Optional[str] = None
    intermediary: Optional[str] = None
    named: Optional[str] = None
    owner: Optional[str] = None
    descriptor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


_SCHEME_FIELDS = {
    NamingScheme.OBFUSCATED: "obfuscated",
    NamingScheme.INTERMEDIARY: "intermediary",
    NamingScheme.NAMED: "named",
}


@dataclass
class VersionDescriptor:
    """A published Yarn build for one product version.

    Two descriptors describe the same artifact when their build numbers match.
    """
    build: int
    maven: str  # group:artifact:version
    game_version: Optional[str] = None
    separator: Optional[str] = None
    version: Optional[str] = None
    stable: Optional[bool] = None

    def _coordinate(self):
        parts = self.maven.split(":")
        if len(parts) != 3 or not all(parts):
            raise ValueError(f"Malformed maven coordinate: {self.maven!r}")
        return parts

    @property
    def group(self) -> str:
        return self._coordinate()[0]

    @property
    def artifact(self) -> str:
        return self._coordinate()[1]

    @property
    def artifact_version(self) -> str:
        return self._coordinate()[2]

    def artifact_filename(self, generation: ArtifactGeneration) -> str:
        """File name of the artifact, identical to the last segment of its URL."""
        return f"{self.artifact}-{self.artifact_version}-{generation.classifier}.{generation.extension}"

    def maven_url(self, base: str, generation: ArtifactGeneration) -> str:
        """Build the repository URL of this build's artifact for a generation."""
        group_path = self.group.replace(".", "/")
        return (
            f"{base.rstrip('/')}/{group_path}/{self.artifact}/{self.artifact_version}/"
            f"{self.artifact_filename(generation)}"
        )

    def same_build(self, other: Optional["VersionDescriptor"]) -> bool:
        return other is not None and other.build == self.build

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionDescriptor":
        """Build from a metadata service record (camelCase keys)."""
        try:
            build = int(data["build"])
            maven = str(data["maven"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid version record: {data!r}") from exc
        return cls(
            build=build,
            maven=maven,
            game_version=data.get("gameVersion"),
            separator=data.get("separator"),
            version=data.get("version"),
            stable=data.get("stable"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "gameVersion": self.game_version,
            "separator": self.separator,
            "build": self.build,
            "maven": self.maven,
            "version": self.version,
            "stable": self.stable,
        }
        return {k: v for k, v in data.items() if v is not None}
