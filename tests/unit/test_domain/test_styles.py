"""
test_styles.py - StyleSpec 파싱/적용 테스트

검증 포인트:
1. 닫힌 aspect 집합 (알 수 없는 키 → InvalidStyleError)
2. camelCase 별칭 (numFmt, fgColor, wrapText)
3. 속성 단위 merge: 지정한 속성만 덮어씀
"""

import pytest
from openpyxl import Workbook

from src.domain.errors import ErrorCodes, InvalidStyleError
from src.domain.styles import (
    AlignmentSpec,
    BorderSpec,
    FillSpec,
    FontSpec,
    ProtectionSpec,
    SideSpec,
    StyleSpec,
)


@pytest.fixture
def cell():
    """스타일 적용 대상 셀."""
    wb = Workbook()
    ws = wb.active
    ws["A1"] = "value"
    return ws["A1"]


# =============================================================================
# StyleSpec.from_dict 테스트
# =============================================================================

class TestStyleSpecFromDict:
    """JSON 매핑 → StyleSpec."""

    def test_parses_all_aspects(self):
        spec = StyleSpec.from_dict({
            "font": {"bold": True, "size": 12, "color": {"argb": "FFFF0000"}},
            "fill": {"type": "pattern", "pattern": "solid", "fgColor": {"argb": "FF0000FF"}},
            "border": {"top": {"style": "thin"}, "bottom": {"style": "double"}},
            "alignment": {"horizontal": "center", "wrapText": True},
            "numFmt": "0.00",
            "protection": {"locked": False},
        })

        assert spec.font == FontSpec(bold=True, size=12.0, color="FFFF0000")
        assert spec.fill == FillSpec(pattern_type="solid", fg_color="FF0000FF")
        assert spec.border == BorderSpec(
            top=SideSpec(style="thin"), bottom=SideSpec(style="double"),
        )
        assert spec.alignment == AlignmentSpec(horizontal="center", wrap_text=True)
        assert spec.number_format == "0.00"
        assert spec.protection == ProtectionSpec(locked=False)

    def test_snake_case_number_format(self):
        spec = StyleSpec.from_dict({"number_format": "yyyy-mm-dd"})
        assert spec.number_format == "yyyy-mm-dd"

    def test_omitted_aspects_are_none(self):
        spec = StyleSpec.from_dict({"font": {"italic": True}})

        assert spec.fill is None
        assert spec.border is None
        assert spec.alignment is None
        assert spec.number_format is None
        assert spec.protection is None
        assert not spec.is_empty()

    def test_empty_mapping_is_empty_spec(self):
        assert StyleSpec.from_dict({}).is_empty()

    def test_unknown_aspect_rejected(self):
        """닫힌 aspect 집합: 알 수 없는 키 → 에러."""
        with pytest.raises(InvalidStyleError) as exc_info:
            StyleSpec.from_dict({"font": {"bold": True}, "shadow": {"blur": 2}})

        assert exc_info.value.code == ErrorCodes.INVALID_STYLE
        assert exc_info.value.context["keys"] == ["shadow"]

    def test_unknown_font_attribute_rejected(self):
        with pytest.raises(InvalidStyleError) as exc_info:
            StyleSpec.from_dict({"font": {"weight": 700}})

        assert exc_info.value.context["aspect"] == "font"

    def test_wrong_attribute_type_rejected(self):
        with pytest.raises(InvalidStyleError):
            StyleSpec.from_dict({"font": {"bold": "yes"}})

    def test_bool_is_not_a_number(self):
        with pytest.raises(InvalidStyleError):
            StyleSpec.from_dict({"font": {"size": True}})

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidStyleError):
            StyleSpec.from_dict(["font"])

    def test_gradient_fill_rejected(self):
        with pytest.raises(InvalidStyleError) as exc_info:
            StyleSpec.from_dict({"fill": {"type": "gradient", "stops": []}})

        assert "pattern" in exc_info.value.context["error"]

    def test_invalid_color_rejected(self):
        with pytest.raises(InvalidStyleError):
            StyleSpec.from_dict({"font": {"color": "red"}})

    def test_color_normalized_to_upper(self):
        spec = StyleSpec.from_dict({"font": {"color": {"rgb": "ff00aa"}}})
        assert spec.font.color == "FF00AA"

    def test_underline_bool_alias(self):
        assert FontSpec.from_dict({"underline": True}).underline == "single"
        assert FontSpec.from_dict({"underline": False}).underline == "none"

    def test_unknown_border_side_rejected(self):
        with pytest.raises(InvalidStyleError):
            StyleSpec.from_dict({"border": {"diagonal": {"style": "thin"}}})

    def test_number_format_must_be_string(self):
        with pytest.raises(InvalidStyleError):
            StyleSpec.from_dict({"numFmt": 2})


# =============================================================================
# StyleSpec.apply 테스트
# =============================================================================

class TestStyleSpecApply:
    """셀 적용 (속성 단위 merge)."""

    def test_font_merge_keeps_unset_attributes(self, cell):
        StyleSpec(font=FontSpec(bold=True)).apply(cell)
        StyleSpec(font=FontSpec(size=12)).apply(cell)

        assert cell.font.bold is True
        assert cell.font.size == 12

    def test_later_spec_wins_on_conflict(self, cell):
        StyleSpec(font=FontSpec(bold=True)).apply(cell)
        StyleSpec(font=FontSpec(bold=False)).apply(cell)

        assert not cell.font.bold

    def test_fill_defaults_to_solid(self, cell):
        StyleSpec(fill=FillSpec(fg_color="FF0000FF")).apply(cell)

        assert cell.fill.patternType == "solid"
        assert cell.fill.fgColor.rgb == "FF0000FF"

    def test_border_sides_merge(self, cell):
        StyleSpec(border=BorderSpec(top=SideSpec(style="thin"))).apply(cell)
        StyleSpec(border=BorderSpec(bottom=SideSpec(style="medium"))).apply(cell)

        assert cell.border.top.style == "thin"
        assert cell.border.bottom.style == "medium"
        assert cell.border.left.style is None

    def test_side_color_merge_keeps_style(self, cell):
        StyleSpec(border=BorderSpec(left=SideSpec(style="thin"))).apply(cell)
        StyleSpec(border=BorderSpec(left=SideSpec(color="FFFF0000"))).apply(cell)

        assert cell.border.left.style == "thin"
        assert cell.border.left.color.rgb == "FFFF0000"

    def test_alignment_and_number_format(self, cell):
        StyleSpec(
            alignment=AlignmentSpec(horizontal="center", wrap_text=True),
            number_format="0.00",
        ).apply(cell)

        assert cell.alignment.horizontal == "center"
        assert cell.alignment.wrap_text is True
        assert cell.number_format == "0.00"

    def test_protection(self, cell):
        StyleSpec(protection=ProtectionSpec(locked=False, hidden=True)).apply(cell)

        assert cell.protection.locked is False
        assert cell.protection.hidden is True

    def test_invalid_value_raises_invalid_style(self, cell):
        """openpyxl이 거부하는 값 → InvalidStyleError."""
        spec = StyleSpec(border=BorderSpec(top=SideSpec(style="wavy")))

        with pytest.raises(InvalidStyleError) as exc_info:
            spec.apply(cell)

        assert exc_info.value.context["cell"] == "A1"
        assert isinstance(exc_info.value.__cause__, ValueError)
