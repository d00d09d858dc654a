# backend/educacenso/tests/unit/test_document_validator.py

"""Unit tests for CPF/CNPJ validation."""

import pytest

from educacenso.services.data_validation.document_validator import (
    clean_document,
    format_cnpj,
    format_cpf,
    validate_cnpj,
    validate_cpf,
    validate_cpf_or_cnpj,
)


class TestCPF:
    @pytest.mark.parametrize("cpf", ["11144477735", "111.444.777-35", "529.982.247-25"])
    def test_valid_cpf_is_accepted_and_formatted(self, cpf):
        result = validate_cpf(cpf)
        assert result.valid is True
        assert result.error is None
        assert result.formatted == format_cpf(clean_document(cpf))

    def test_formatted_output(self):
        assert validate_cpf("11144477735").formatted == "111.444.777-35"

    def test_empty_cpf(self):
        result = validate_cpf("")
        assert result.valid is False
        assert result.error == "CPF inválido"

    def test_wrong_length(self):
        result = validate_cpf("1234567890")
        assert result.valid is False
        assert result.error == "CPF deve conter 11 dígitos"

    def test_repeated_digits(self):
        result = validate_cpf("111.111.111-11")
        assert result.valid is False
        assert result.error == "CPF inválido (todos os dígitos são iguais)"

    @pytest.mark.parametrize("cpf", ["11144477736", "11144477725"])
    def test_wrong_check_digit(self, cpf):
        result = validate_cpf(cpf)
        assert result.valid is False
        assert result.error == "CPF inválido (dígito verificador incorreto)"


class TestCNPJ:
    def test_valid_cnpj(self):
        result = validate_cnpj("11.222.333/0001-81")
        assert result.valid is True
        assert result.formatted == "11.222.333/0001-81"

    def test_wrong_check_digit(self):
        result = validate_cnpj("11222333000182")
        assert result.valid is False
        assert result.error == "CNPJ inválido (dígito verificador incorreto)"

    def test_wrong_length(self):
        assert validate_cnpj("1122233300018").error == "CNPJ deve conter 14 dígitos"

    def test_repeated_digits(self):
        assert validate_cnpj("00000000000000").error == "CNPJ inválido (todos os dígitos são iguais)"


class TestDispatchAndFormatting:
    def test_dispatch_by_length(self):
        assert validate_cpf_or_cnpj("11144477735").formatted == "111.444.777-35"
        assert validate_cpf_or_cnpj("11222333000181").formatted == "11.222.333/0001-81"

    def test_missing_document(self):
        assert validate_cpf_or_cnpj(None).error == "Documento não informado"

    def test_unexpected_length(self):
        result = validate_cpf_or_cnpj("123")
        assert result.valid is False
        assert "11 dígitos (CPF) ou 14 dígitos (CNPJ)" in result.error

    def test_format_leaves_invalid_lengths_untouched(self):
        assert format_cpf("123") == "123"
        assert format_cnpj("123") == "123"

    def test_clean_document(self):
        assert clean_document(" 111.444.777-35 ") == "11144477735"
        assert clean_document(None) == ""
