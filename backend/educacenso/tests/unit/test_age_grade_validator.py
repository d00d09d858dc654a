# backend/educacenso/tests/unit/test_age_grade_validator.py

"""Unit tests for the census age (31 March cut-off) and age/grade bands."""

from datetime import date

import pytest

from educacenso.services.data_validation.age_grade_validator import (
    AGE_RULES_BY_GRADE,
    calculate_age,
    calculate_age_grade_distortion,
    extract_grade_number,
    has_age_grade_distortion,
    validate_age_grade,
)

AFTER_CUTOFF = date(2024, 6, 1)


class TestCalculateAge:
    def test_age_is_measured_at_end_of_year(self):
        # Birthday in November still counts for the current school year
        assert calculate_age("2014-11-20", AFTER_CUTOFF) == 10

    def test_reference_before_cutoff_uses_previous_year(self):
        assert calculate_age("2014-01-15", date(2024, 3, 15)) == 9

    def test_cutoff_day_itself_uses_current_year(self):
        assert calculate_age("2014-01-15", date(2024, 3, 31)) == 10

    def test_brazilian_date_format(self):
        assert calculate_age("15/01/2014", AFTER_CUTOFF) == 10

    def test_invalid_birth_date_raises(self):
        with pytest.raises(ValueError, match="Data de nascimento inválida"):
            calculate_age("invalid", AFTER_CUTOFF)


class TestValidateAgeGrade:
    def test_ideal_age(self):
        result = validate_age_grade("2014-05-01", 5, reference_date=AFTER_CUTOFF)
        assert result.valid is True
        assert result.distortion == "none"
        assert result.warning is None
        assert (result.expected_min, result.expected_max) == (10, 11)

    def test_within_band_above_ideal(self):
        result = validate_age_grade("2013-05-01", 5, reference_date=AFTER_CUTOFF)
        assert result.valid is True
        assert result.distortion == "low"
        assert result.warning == "Aluno com 11 anos na 5ª série (idade ideal: 10 anos)"

    def test_too_young_without_exceptions(self):
        result = validate_age_grade("2016-05-01", 5, reference_date=AFTER_CUTOFF)
        assert result.valid is False
        assert result.distortion == "medium"
        assert result.error == "Idade insuficiente: 8 anos (mínimo: 10 anos para 5ª série)"

    def test_too_young_with_exceptions(self):
        result = validate_age_grade(
            "2016-05-01", 5, allow_exceptions=True, reference_date=AFTER_CUTOFF
        )
        assert result.valid is True
        assert result.error is None
        assert result.warning.endswith("Requer justificativa.")

    def test_far_too_young_is_high_distortion(self):
        result = validate_age_grade("2017-05-01", 5, reference_date=AFTER_CUTOFF)
        assert result.distortion == "high"

    def test_above_band_medium(self):
        result = validate_age_grade("2011-05-01", 5, reference_date=AFTER_CUTOFF)
        assert result.valid is True
        assert result.distortion == "medium"
        assert "Diferença: 2 anos." in result.warning

    def test_above_band_high(self):
        result = validate_age_grade("2009-02-01", 5, reference_date=AFTER_CUTOFF)
        assert result.valid is True
        assert result.distortion == "high"
        assert result.warning == (
            "Distorção idade-série detectada: aluno com 15 anos na 5ª série "
            "(idade máxima recomendada: 11 anos). Diferença: 4 anos."
        )

    def test_threshold_is_configurable(self):
        result = validate_age_grade(
            "2011-05-01", 5, reference_date=AFTER_CUTOFF, high_distortion_threshold=1
        )
        assert result.distortion == "high"

    def test_threshold_from_settings(self, monkeypatch):
        monkeypatch.setenv("AGE_GRADE_HIGH_DISTORTION_THRESHOLD", "1")
        result = validate_age_grade("2011-05-01", 5, reference_date=AFTER_CUTOFF)
        assert result.distortion == "high"

    def test_grade_without_rules(self):
        result = validate_age_grade("2009-02-01", 10, reference_date=AFTER_CUTOFF)
        assert result.valid is False
        assert result.error == "Série/ano 10 não possui regras de idade definidas"

    def test_grade_label(self):
        result = validate_age_grade("2014-05-01", "5º Ano", reference_date=AFTER_CUTOFF)
        assert result.distortion == "none"

    def test_invalid_birth_date(self):
        result = validate_age_grade("31/31/2010", 5, reference_date=AFTER_CUTOFF)
        assert result.valid is False
        assert result.error == "Data de nascimento inválida"


class TestHelpers:
    @pytest.mark.parametrize(
        "label, expected",
        [("5º Ano", 5), ("1ª série", 1), ("9", 9), ("Multisseriada", None), ("", None), (None, None)],
    )
    def test_extract_grade_number(self, label, expected):
        assert extract_grade_number(label) == expected

    def test_distortion_helpers(self):
        assert calculate_age_grade_distortion("2009-02-01", 5, AFTER_CUTOFF) == "high"
        assert has_age_grade_distortion("2009-02-01", 5, AFTER_CUTOFF) is True
        assert has_age_grade_distortion("2014-05-01", 5, AFTER_CUTOFF) is False

    def test_rules_cover_first_to_ninth_grade(self):
        assert sorted(AGE_RULES_BY_GRADE) == list(range(1, 10))
        assert AGE_RULES_BY_GRADE[1].min == 6
        assert AGE_RULES_BY_GRADE[9].max == 15
