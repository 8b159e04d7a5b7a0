"""Structure provider backed by SourceKitten's 'syntax' and 'structure' JSON output."""

import json
import logging
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from declint.domain.constants import SOURCEKITTEN_SIDECAR_SUFFIX
from declint.domain.errors import StructuralParseError
from declint.domain.protocols import StructureProviderProtocol
from declint.domain.structure import (
    AttributeOccurrence,
    DeclarationKind,
    DeclarationNode,
    StructureModel,
    Token,
    TokenKind,
)

logger = logging.getLogger(__name__)


class SourceKittenGateway(StructureProviderProtocol):
    """
    Loads a StructureModel for a Swift file.

    A sidecar '<file>.sourcekitten.json' holding {"syntax": [...], "structure": {...}}
    is used when present; otherwise the sourcekitten executable is run.
    """

    def __init__(
        self,
        executable: str = "sourcekitten",
        runner: Callable[..., "subprocess.CompletedProcess[str]"] = subprocess.run,
    ) -> None:
        self._executable = executable
        self._runner = runner

    def load(self, path: str) -> StructureModel:
        try:
            contents = Path(path).read_bytes()
        except OSError as exc:
            raise StructuralParseError(f"cannot read file: {exc.strerror or exc}", path) from exc
        sidecar = Path(path + SOURCEKITTEN_SIDECAR_SUFFIX)
        if sidecar.exists():
            logger.debug("Loading structure of %s from %s", path, sidecar)
            try:
                raw = sidecar.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise StructuralParseError(f"cannot read {sidecar.name}: {exc}", path) from exc
            document = self._decode(raw, path)
            if not isinstance(document, dict):
                raise StructuralParseError("sidecar must be a JSON object", path)
            syntax, structure = document.get("syntax"), document.get("structure")
        else:
            logger.debug("Running %s for %s", self._executable, path)
            syntax = self._run("syntax", path)
            structure = self._run("structure", path)
        return SourceKittenGateway.build_model(path, contents, syntax, structure)

    def _run(self, command: str, path: str) -> Any:
        try:
            result = self._runner(
                [self._executable, command, "--file", path],
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise StructuralParseError(f"'{self._executable}' executable not found", path) from exc
        except UnicodeDecodeError as exc:
            raise StructuralParseError(f"{self._executable} {command} output is not UTF-8: {exc}", path) from exc
        except OSError as exc:
            raise StructuralParseError(f"cannot run '{self._executable}': {exc.strerror or exc}", path) from exc
        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise StructuralParseError(f"{self._executable} {command} failed: {detail}", path)
        return self._decode(result.stdout, path)

    @staticmethod
    def _decode(raw: str, path: str) -> Any:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StructuralParseError(f"invalid SourceKitten JSON: {exc}", path) from exc

    @staticmethod
    def build_model(path: str | None, contents: bytes, syntax: object, structure: object) -> StructureModel:
        """Validate SourceKitten documents against the file contents and build the model."""
        if not isinstance(syntax, list):
            raise StructuralParseError("syntax map must be a list", path)
        if not isinstance(structure, Mapping):
            raise StructuralParseError("structure must be an object", path)
        tokens = SourceKittenGateway._tokens(path, contents, syntax)
        root = SourceKittenGateway._node(path, len(contents), structure)
        return StructureModel(path=path, contents=contents, tokens=tokens, root=root)

    @staticmethod
    def _tokens(path: str | None, contents: bytes, syntax: list[object]) -> tuple[Token, ...]:
        tokens: list[Token] = []
        previous_end = 0
        for entry in syntax:
            if not isinstance(entry, Mapping):
                raise StructuralParseError(f"syntax entry {entry!r} is not an object", path)
            offset, length = SourceKittenGateway._span(path, len(contents), entry, "offset", "length")
            if length <= 0:
                raise StructuralParseError(f"token at offset {offset} has no length", path)
            if offset < previous_end:
                raise StructuralParseError(f"token at offset {offset} overlaps its predecessor", path)
            try:
                text = contents[offset:offset + length].decode("utf-8")
            except UnicodeDecodeError as exc:
                raise StructuralParseError(
                    f"token at offset {offset} does not fall on character boundaries", path
                ) from exc
            kind = TokenKind.from_sourcekitten(str(entry.get("kind", "")))
            tokens.append(Token(kind=kind, offset=offset, length=length, text=text))
            previous_end = offset + length
        return tuple(tokens)

    @staticmethod
    def _node(path: str | None, size: int, raw: Mapping[str, Any]) -> DeclarationNode:
        if "key.offset" in raw or "key.length" in raw:
            offset, length = SourceKittenGateway._span(path, size, raw, "key.offset", "key.length")
        else:
            offset, length = 0, size
        attributes = []
        for attribute in raw.get("key.attributes", []) or []:
            if not isinstance(attribute, Mapping):
                raise StructuralParseError(f"attribute {attribute!r} is not an object", path)
            attr_offset, attr_length = SourceKittenGateway._span(
                path, size, attribute, "key.offset", "key.length"
            )
            attributes.append(
                AttributeOccurrence(str(attribute.get("key.attribute", "")), attr_offset, attr_length)
            )
        children = []
        for child in raw.get("key.substructure", []) or []:
            if not isinstance(child, Mapping):
                raise StructuralParseError(f"substructure {child!r} is not an object", path)
            children.append(SourceKittenGateway._node(path, size, child))
        return DeclarationNode(
            kind=DeclarationKind.from_sourcekitten(raw.get("key.kind")),
            offset=offset,
            length=length,
            attributes=tuple(attributes),
            children=tuple(children),
        )

    @staticmethod
    def _span(
        path: str | None, size: int, raw: Mapping[str, Any], offset_key: str, length_key: str
    ) -> tuple[int, int]:
        offset, length = raw.get(offset_key), raw.get(length_key)
        if (
            not isinstance(offset, int)
            or not isinstance(length, int)
            or isinstance(offset, bool)
            or isinstance(length, bool)
        ):
            raise StructuralParseError(f"missing or non-integer {offset_key}/{length_key} in {dict(raw)!r}", path)
        if offset < 0 or length < 0 or offset + length > size:
            raise StructuralParseError(f"range {offset}+{length} lies outside the file ({size} bytes)", path)
        return offset, length
