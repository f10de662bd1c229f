"""
Cell style schemas: 닫힌 스타일 aspect 집합.

aspect: font, fill, border, alignment, number_format, protection

규칙:
- 모든 속성은 Optional. None = "기존 값 유지"
- 적용은 속성 단위 merge: 지정한 속성만 덮어씀
  (예: header {bold} 위에 all {size=12} → bold + size 12)
- 알 수 없는 aspect/속성 키 → InvalidStyleError (동적 대입 금지)
- 브라우저 클라이언트용 camelCase 별칭 허용 (wrapText, fgColor, numFmt 등)
"""

from copy import copy
from dataclasses import dataclass
from typing import Any, ClassVar

from openpyxl.cell.cell import Cell
from openpyxl.styles import PatternFill

from src.domain.errors import InvalidStyleError

# =============================================================================
# Parsing helpers
# =============================================================================

# kind: "str" | "bool" | "number" | "int" | "color"
FieldTable = dict[str, tuple[tuple[str, ...], str]]


def _parse_color(aspect: str, key: str, value: Any) -> str:
    """
    색상 값 정규화.

    허용: "FF0000", "FFFF0000", {"argb": "FFFF0000"}, {"rgb": "FF0000"}
    """
    if isinstance(value, dict):
        value = value.get("argb", value.get("rgb"))
    if not isinstance(value, str) or len(value) not in (6, 8):
        raise InvalidStyleError(aspect=aspect, key=key, value=value,
                                error="color must be 6 or 8 hex digits")
    try:
        int(value, 16)
    except ValueError:
        raise InvalidStyleError(aspect=aspect, key=key, value=value,
                                error="color must be hex") from None
    return value.upper()


def _parse_value(aspect: str, key: str, kind: str, value: Any) -> Any:
    """단일 속성 값 타입 검증."""
    if value is None:
        return None
    if kind == "color":
        return _parse_color(aspect, key, value)
    if kind == "bool":
        if isinstance(value, bool):
            return value
    elif kind == "number":
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif kind == "int":
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif kind == "str":
        if isinstance(value, str):
            return value
    raise InvalidStyleError(aspect=aspect, key=key, value=value,
                            error=f"expected {kind}")


def _parse_fields(aspect: str, data: Any, fields: FieldTable) -> dict[str, Any]:
    """
    매핑을 필드 테이블에 따라 파싱.

    Returns:
        {attr: value} (입력에 있던 속성만)

    Raises:
        InvalidStyleError: dict가 아님, 알 수 없는 키, 타입 불일치
    """
    if not isinstance(data, dict):
        raise InvalidStyleError(aspect=aspect, error="expected a mapping")

    known = {alias for aliases, _ in fields.values() for alias in aliases}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidStyleError(aspect=aspect, keys=unknown, error="unknown keys")

    parsed: dict[str, Any] = {}
    for attr, (aliases, kind) in fields.items():
        for alias in aliases:
            if alias in data:
                parsed[attr] = _parse_value(aspect, alias, kind, data[alias])
                break
    return parsed


# =============================================================================
# Aspect specs
# =============================================================================

@dataclass(frozen=True)
class FontSpec:
    """글꼴 aspect."""
    name: str | None = None
    size: float | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: str | None = None  # single, double, singleAccounting, doubleAccounting, none
    strike: bool | None = None
    color: str | None = None

    FIELDS: ClassVar[FieldTable] = {
        "name": (("name",), "str"),
        "size": (("size",), "number"),
        "bold": (("bold",), "bool"),
        "italic": (("italic",), "bool"),
        "underline": (("underline",), "str"),
        "strike": (("strike",), "bool"),
        "color": (("color",), "color"),
    }

    @classmethod
    def from_dict(cls, data: Any) -> "FontSpec":
        if isinstance(data, dict) and isinstance(data.get("underline"), bool):
            # exceljs 스타일: underline: true → single
            data = {**data, "underline": "single" if data["underline"] else "none"}
        return cls(**_parse_fields("font", data, cls.FIELDS))

    def apply(self, cell: Cell) -> None:
        font = copy(cell.font)
        if self.name is not None:
            font.name = self.name
        if self.size is not None:
            font.size = self.size
        if self.bold is not None:
            font.bold = self.bold
        if self.italic is not None:
            font.italic = self.italic
        if self.underline is not None:
            font.underline = self.underline
        if self.strike is not None:
            font.strike = self.strike
        if self.color is not None:
            font.color = self.color
        cell.font = font


@dataclass(frozen=True)
class FillSpec:
    """
    채우기 aspect (pattern fill만).

    색상만 지정하고 pattern_type이 없으면 solid로 채운다.
    """
    pattern_type: str | None = None
    fg_color: str | None = None
    bg_color: str | None = None

    FIELDS: ClassVar[FieldTable] = {
        "pattern_type": (("pattern_type", "patternType", "pattern"), "str"),
        "fg_color": (("fg_color", "fgColor"), "color"),
        "bg_color": (("bg_color", "bgColor"), "color"),
    }

    @classmethod
    def from_dict(cls, data: Any) -> "FillSpec":
        if isinstance(data, dict) and "type" in data:
            if data["type"] != "pattern":
                raise InvalidStyleError(aspect="fill", key="type", value=data["type"],
                                        error="only pattern fills are supported")
            data = {k: v for k, v in data.items() if k != "type"}
        return cls(**_parse_fields("fill", data, cls.FIELDS))

    def apply(self, cell: Cell) -> None:
        fill = copy(cell.fill)
        if not isinstance(fill, PatternFill):
            fill = PatternFill()
        if self.pattern_type is not None:
            fill.patternType = self.pattern_type
        if self.fg_color is not None:
            fill.fgColor = self.fg_color
        if self.bg_color is not None:
            fill.bgColor = self.bg_color
        if fill.patternType is None and (self.fg_color or self.bg_color):
            fill.patternType = "solid"
        cell.fill = fill


@dataclass(frozen=True)
class SideSpec:
    """테두리 한 변."""
    style: str | None = None  # thin, medium, thick, dashed, dotted, double, ...
    color: str | None = None

    FIELDS: ClassVar[FieldTable] = {
        "style": (("style", "border_style"), "str"),
        "color": (("color",), "color"),
    }

    @classmethod
    def from_dict(cls, data: Any, side: str) -> "SideSpec":
        return cls(**_parse_fields(f"border.{side}", data, cls.FIELDS))


@dataclass(frozen=True)
class BorderSpec:
    """테두리 aspect. 지정한 변만 덮어씀."""
    left: SideSpec | None = None
    right: SideSpec | None = None
    top: SideSpec | None = None
    bottom: SideSpec | None = None

    SIDES: ClassVar[tuple[str, ...]] = ("left", "right", "top", "bottom")

    @classmethod
    def from_dict(cls, data: Any) -> "BorderSpec":
        if not isinstance(data, dict):
            raise InvalidStyleError(aspect="border", error="expected a mapping")
        unknown = sorted(set(data) - set(cls.SIDES))
        if unknown:
            raise InvalidStyleError(aspect="border", keys=unknown, error="unknown keys")
        return cls(**{
            side: SideSpec.from_dict(data[side], side)
            for side in cls.SIDES
            if data.get(side) is not None
        })

    def apply(self, cell: Cell) -> None:
        border = copy(cell.border)
        border.left = self._merge_side(border.left, self.left)
        border.right = self._merge_side(border.right, self.right)
        border.top = self._merge_side(border.top, self.top)
        border.bottom = self._merge_side(border.bottom, self.bottom)
        cell.border = border

    @staticmethod
    def _merge_side(current: Any, spec: SideSpec | None) -> Any:
        if spec is None:
            return current
        side = copy(current)
        if spec.style is not None:
            side.style = spec.style
        if spec.color is not None:
            side.color = spec.color
        return side


@dataclass(frozen=True)
class AlignmentSpec:
    """정렬 aspect."""
    horizontal: str | None = None
    vertical: str | None = None
    wrap_text: bool | None = None
    shrink_to_fit: bool | None = None
    indent: int | None = None
    text_rotation: int | None = None

    FIELDS: ClassVar[FieldTable] = {
        "horizontal": (("horizontal",), "str"),
        "vertical": (("vertical",), "str"),
        "wrap_text": (("wrap_text", "wrapText"), "bool"),
        "shrink_to_fit": (("shrink_to_fit", "shrinkToFit"), "bool"),
        "indent": (("indent",), "int"),
        "text_rotation": (("text_rotation", "textRotation"), "int"),
    }

    @classmethod
    def from_dict(cls, data: Any) -> "AlignmentSpec":
        return cls(**_parse_fields("alignment", data, cls.FIELDS))

    def apply(self, cell: Cell) -> None:
        alignment = copy(cell.alignment)
        if self.horizontal is not None:
            alignment.horizontal = self.horizontal
        if self.vertical is not None:
            alignment.vertical = self.vertical
        if self.wrap_text is not None:
            alignment.wrap_text = self.wrap_text
        if self.shrink_to_fit is not None:
            alignment.shrink_to_fit = self.shrink_to_fit
        if self.indent is not None:
            alignment.indent = self.indent
        if self.text_rotation is not None:
            alignment.text_rotation = self.text_rotation
        cell.alignment = alignment


@dataclass(frozen=True)
class ProtectionSpec:
    """셀 보호 aspect."""
    locked: bool | None = None
    hidden: bool | None = None

    FIELDS: ClassVar[FieldTable] = {
        "locked": (("locked",), "bool"),
        "hidden": (("hidden",), "bool"),
    }

    @classmethod
    def from_dict(cls, data: Any) -> "ProtectionSpec":
        return cls(**_parse_fields("protection", data, cls.FIELDS))

    def apply(self, cell: Cell) -> None:
        protection = copy(cell.protection)
        if self.locked is not None:
            protection.locked = self.locked
        if self.hidden is not None:
            protection.hidden = self.hidden
        cell.protection = protection


# =============================================================================
# StyleSpec
# =============================================================================

@dataclass(frozen=True)
class StyleSpec:
    """
    셀 스타일 명세.

    적용 순서 고정: font → fill → border → alignment → number_format → protection
    """
    font: FontSpec | None = None
    fill: FillSpec | None = None
    border: BorderSpec | None = None
    alignment: AlignmentSpec | None = None
    number_format: str | None = None
    protection: ProtectionSpec | None = None

    ASPECT_KEYS: ClassVar[tuple[str, ...]] = (
        "font", "fill", "border", "alignment",
        "number_format", "numFmt", "protection",
    )

    @classmethod
    def from_dict(cls, data: Any) -> "StyleSpec":
        """
        JSON 매핑 → StyleSpec.

        Raises:
            InvalidStyleError: 알 수 없는 aspect 또는 속성
        """
        if not isinstance(data, dict):
            raise InvalidStyleError(error="style must be a mapping")

        unknown = sorted(set(data) - set(cls.ASPECT_KEYS))
        if unknown:
            raise InvalidStyleError(keys=unknown, error="unknown style aspects")

        number_format = data.get("number_format", data.get("numFmt"))
        if number_format is not None and not isinstance(number_format, str):
            raise InvalidStyleError(aspect="number_format", value=number_format,
                                    error="expected str")

        return cls(
            font=FontSpec.from_dict(data["font"]) if data.get("font") is not None else None,
            fill=FillSpec.from_dict(data["fill"]) if data.get("fill") is not None else None,
            border=(
                BorderSpec.from_dict(data["border"])
                if data.get("border") is not None else None
            ),
            alignment=(
                AlignmentSpec.from_dict(data["alignment"])
                if data.get("alignment") is not None else None
            ),
            number_format=number_format,
            protection=(
                ProtectionSpec.from_dict(data["protection"])
                if data.get("protection") is not None else None
            ),
        )

    def apply(self, cell: Cell) -> None:
        """
        셀에 스타일 적용 (속성 단위 merge).

        Raises:
            InvalidStyleError: openpyxl이 값을 거부 (예: 알 수 없는 border style)
        """
        try:
            if self.font is not None:
                self.font.apply(cell)
            if self.fill is not None:
                self.fill.apply(cell)
            if self.border is not None:
                self.border.apply(cell)
            if self.alignment is not None:
                self.alignment.apply(cell)
            if self.number_format is not None:
                cell.number_format = self.number_format
            if self.protection is not None:
                self.protection.apply(cell)
        except (TypeError, ValueError) as e:
            raise InvalidStyleError(cell=cell.coordinate, error=str(e)) from e

    def is_empty(self) -> bool:
        return all(
            aspect is None
            for aspect in (
                self.font, self.fill, self.border,
                self.alignment, self.number_format, self.protection,
            )
        )
