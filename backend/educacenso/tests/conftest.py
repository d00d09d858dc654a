# backend/educacenso/tests/conftest.py

import copy
import os
from datetime import date
from typing import Any, AsyncGenerator, Dict

os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from educacenso.config import get_settings
from educacenso.main import app
from educacenso.schemas.census import CensusSnapshot

# After the 31 March cut-off, so ages are measured at 31/12/2024
REFERENCE_DATE = date(2024, 6, 1)

VALID_STUDENT_CPF = "11144477735"
VALID_TEACHER_CPF = "52998224725"
VALID_CNPJ = "11222333000181"


BASE_SNAPSHOT: Dict[str, Any] = {
    "schools": [
        {
            "id": "s1",
            "code": "ESC-001",
            "inepCode": "12345678",
            "name": "Escola Teste",
            "director": "Maria Diretora",
            "address": "Rua das Flores, 100",
            "city": "Fortaleza",
            "state": "CE",
            "phone": "(85) 3333-4444",
            "email": "escola@teste.gov.br",
            "administrativeDependency": "Municipal",
            "locationType": "Urbana",
            "infrastructure": {
                "classrooms": 12,
                "library": True,
                "computerLab": True,
                "scienceLab": False,
                "sportsCourt": True,
                "cafeteria": True,
                "auditorium": False,
                "medicalRoom": False,
                "accessible": True,
            },
            "academicYears": [
                {
                    "id": "y1",
                    "name": "2024",
                    "startDate": "2024-02-01",
                    "endDate": "2024-12-15",
                    "status": "active",
                    "turmas": [
                        {
                            "id": "t1",
                            "name": "5º Ano A",
                            "schoolId": "s1",
                            "yearId": "y1",
                            "shift": "Manhã",
                            "etapaEnsinoId": "e1",
                            "serieAnoId": "sa5",
                            "serieAnoName": "5º Ano",
                            "educationModality": "01",
                            "tipoRegime": "01",
                            "maxCapacity": 25,
                        }
                    ],
                }
            ],
        }
    ],
    "students": [
        {
            "id": "st1",
            "registration": "2024001",
            "name": "João da Silva",
            "cpf": VALID_STUDENT_CPF,
            # 15 years before the academic year starts
            "birthDate": "2009-02-01",
            "gender": "M",
            "raceColor": "Parda",
            "guardian": "Ana da Silva",
            "address": {
                "street": "Rua A",
                "number": "10",
                "neighborhood": "Centro",
                "city": "Fortaleza",
                "state": "CE",
                "zipCode": "60000-000",
            },
            "enrollments": [
                {
                    "id": "m1",
                    "schoolId": "s1",
                    "academicYearId": "y1",
                    "classroomId": "t1",
                    "grade": "5º Ano",
                    "status": "Cursando",
                    "enrollmentDate": "2024-02-05",
                }
            ],
        }
    ],
    "teachers": [
        {
            "id": "p1",
            "schoolId": "s1",
            "name": "Carlos Souza",
            "cpf": VALID_TEACHER_CPF,
            "email": "carlos@teste.gov.br",
            "phone": "(85) 99999-0000",
            "subject": "Matemática",
            "enabledSubjects": ["Matemática", "Ciências"],
            "role": "Professor",
            "employmentBond": "Efetivo",
            "contractType": "Estatutário",
            "admissionDate": "2015-03-01",
            "academicBackground": "Licenciatura em Matemática",
        }
    ],
    "curriculumStages": [
        {
            "id": "e1",
            "name": "Ensino Fundamental - Anos Iniciais",
            "codigoCenso": "03",
            "seriesAnos": [{"id": "sa5", "name": "5º Ano"}],
        }
    ],
}


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached; tests that patch the environment get a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def snapshot_data() -> Dict[str, Any]:
    """A deep copy of the example network, safe to modify per test."""
    return copy.deepcopy(BASE_SNAPSHOT)


@pytest.fixture
def snapshot(snapshot_data: Dict[str, Any]) -> CensusSnapshot:
    return CensusSnapshot.model_validate(snapshot_data)


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the FastAPI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as test_client:
        yield test_client
