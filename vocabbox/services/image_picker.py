"""Image picker contract shared by the Add Word controller and its UI adapters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class PermissionStatus(Enum):
    """Media library permission states."""
    UNDETERMINED = "undetermined"
    GRANTED = "granted"
    DENIED = "denied"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PermissionStatus":
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.UNDETERMINED


@dataclass
class PickerAsset:
    """A single picked file."""
    uri: str
    name: str = ""


@dataclass
class PickerResult:
    """Outcome of a picker session."""
    canceled: bool
    assets: List[PickerAsset] = field(default_factory=list)

    @classmethod
    def cancelled(cls) -> "PickerResult":
        return cls(canceled=True)

    @property
    def first_uri(self) -> Optional[str]:
        if self.canceled or not self.assets:
            return None
        return self.assets[0].uri


class BaseImagePicker(ABC):
    """Permission-gated access to the user's photo library."""

    @abstractmethod
    async def request_permission(self) -> PermissionStatus:
        """Ask for (or report the stored answer to) media library access."""
        pass

    @abstractmethod
    async def launch_image_library(self) -> PickerResult:
        """Let the user choose one image."""
        pass
