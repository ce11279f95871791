"""Chart data models — metadata and in-memory chart contents."""

from __future__ import annotations

from dataclasses import dataclass, field

from chartget.errors import ArchiveError

METADATA_FILE = "Chart.yaml"


@dataclass
class ChartMetadata:
    """The contents of a chart's ``Chart.yaml``."""

    name: str
    version: str
    api_version: str = "v2"
    description: str = ""
    app_version: str = ""
    type: str = "application"
    keywords: list[str] = field(default_factory=list)

    def validate(self) -> None:
        if not self.name:
            raise ArchiveError("chart metadata is missing 'name'")
        if "/" in self.name or "\\" in self.name:
            raise ArchiveError(f"chart name '{self.name}' must not contain path separators")
        if not self.version:
            raise ArchiveError(f"chart '{self.name}' metadata is missing 'version'")
        if "/" in self.version or "\\" in self.version:
            raise ArchiveError(
                f"chart '{self.name}' version '{self.version}' must not contain path separators"
            )
        if any(c.isspace() for c in self.version):
            raise ArchiveError(f"chart '{self.name}' has an invalid version '{self.version}'")

    def to_dict(self) -> dict:
        data: dict = {
            "apiVersion": self.api_version,
            "name": self.name,
            "version": self.version,
        }
        # Optional keys are only written when set
        if self.description:
            data["description"] = self.description
        if self.app_version:
            data["appVersion"] = self.app_version
        if self.type:
            data["type"] = self.type
        if self.keywords:
            data["keywords"] = list(self.keywords)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ChartMetadata:
        return cls(
            name=str(data.get("name") or ""),
            version=str(data.get("version") or ""),
            api_version=str(data.get("apiVersion") or "v2"),
            description=str(data.get("description") or ""),
            app_version=str(data.get("appVersion") or ""),
            type=str(data.get("type") or "application"),
            keywords=_as_list(data.get("keywords")),
        )


def _as_list(value) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass
class Chart:
    """A chart held in memory: metadata plus its chart-relative files."""

    metadata: ChartMetadata
    files: dict[str, bytes] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def version(self) -> str:
        return self.metadata.version

    @property
    def qualified_id(self) -> str:
        return f"{self.name}@{self.version}"
