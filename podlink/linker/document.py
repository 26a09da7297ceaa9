# Project document capabilities.
#
# The linker only ever talks to a consumer or dependency project through these
# interfaces: find-or-create of product references and build phases, and
# membership checks on build phase file lists. The Xcode implementation lives
# in podlink.xcode.

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class ProductReference(ABC):
    @property
    @abstractmethod
    def path(self) -> Optional[str]:
        pass


class FileList(ABC):
    @abstractmethod
    def contains(self, path: str) -> bool:
        """True if an entry of this phase references a file with this exact path."""

    @abstractmethod
    def add_file_reference(self, reference: ProductReference) -> None:
        pass


class LinkTarget(ABC):
    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def product_type(self) -> Optional[str]:
        pass

    @property
    @abstractmethod
    def product_name(self) -> Optional[str]:
        pass

    @abstractmethod
    def link_phase(self) -> FileList:
        pass

    @abstractmethod
    def find_or_create_copy_phase(self, name: str) -> FileList:
        pass


class ProjectDocument(ABC):
    path: Path

    @property
    @abstractmethod
    def targets(self) -> List[LinkTarget]:
        pass

    @abstractmethod
    def find_or_create_product_reference(
        self, group_name: str, product_name: str
    ) -> ProductReference:
        pass

    @abstractmethod
    def save(self) -> None:
        pass
