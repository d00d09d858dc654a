# backend/educacenso/tests/unit/test_inep_code_validator.py

import pytest

from educacenso.services.data_validation.inep_code_validator import (
    CURRICULUM_STAGE_CODES,
    get_curriculum_stage_name,
    get_modality_name,
    get_regime_type_name,
    validate_curriculum_stage_code,
    validate_modality_code,
    validate_regime_type_code,
    validate_school_inep_code,
)


class TestSchoolInepCode:
    def test_eight_digits(self):
        result = validate_school_inep_code("12345678")
        assert result.valid is True
        assert result.code == "12345678"

    def test_punctuation_is_ignored(self):
        assert validate_school_inep_code("1234-5678").code == "12345678"

    @pytest.mark.parametrize("code", ["1234567", "123456789"])
    def test_wrong_length(self, code):
        result = validate_school_inep_code(code)
        assert result.valid is False
        assert result.error == "Código INEP da escola deve conter 8 dígitos"

    def test_missing(self):
        assert validate_school_inep_code("").error == "Código INEP não informado"
        assert validate_school_inep_code(None).error == "Código INEP não informado"


class TestCodeTables:
    def test_stage_code_is_zero_padded(self):
        result = validate_curriculum_stage_code("3")
        assert result.valid is True
        assert result.code == "03"
        assert result.description == "Ensino Fundamental - Anos Iniciais"

    def test_unknown_stage_code_lists_valid_codes(self):
        result = validate_curriculum_stage_code("16")
        assert result.valid is False
        assert result.error.startswith("Código de etapa de ensino inválido. Códigos válidos: 01, 02")
        assert result.error.endswith("15")

    def test_missing_stage_code(self):
        assert validate_curriculum_stage_code(None).error == "Código de etapa de ensino não informado"

    def test_modality_and_regime(self):
        assert validate_modality_code("10").description == "Educação Bilíngue"
        assert validate_modality_code("11").valid is False
        assert validate_regime_type_code("4").description == "EAD"
        assert validate_regime_type_code("05").valid is False

    def test_name_getters(self):
        assert get_curriculum_stage_name("5") == "Ensino Médio"
        assert get_modality_name("01") == "Regular"
        assert get_regime_type_name("02") == "Não Seriado"
        assert get_curriculum_stage_name("99") is None

    def test_stage_table_covers_01_to_15(self):
        assert list(CURRICULUM_STAGE_CODES) == [f"{n:02d}" for n in range(1, 16)]
