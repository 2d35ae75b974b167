"""
Pytest Configuration and Fixtures

Shared fixtures for protocol evaluation tests.
"""
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gentreat.core.protocol import (
    BloodPressure,
    CentralVenousLine,
    LiverFailure,
    PainScore,
    Patient,
    PatientTreatment,
    Protocol,
)
from gentreat.core.protocol.rules_blood_pressure import build_blood_pressure_protocol
from gentreat.core.protocol.rules_pain import build_pain_protocol


@pytest.fixture
def patient() -> Patient:
    return Patient("Test Patient")


@pytest.fixture
def empty_treatment(patient) -> PatientTreatment:
    """Patient without any active treatment."""
    return PatientTreatment.of(patient)


@pytest.fixture
def pain_protocol() -> Protocol:
    return build_pain_protocol()


@pytest.fixture
def bp_protocol() -> Protocol:
    return build_blood_pressure_protocol()


@pytest.fixture
def bp40() -> BloodPressure:
    return BloodPressure(40)


@pytest.fixture
def pain3() -> PainScore:
    return PainScore(3)


@pytest.fixture
def cvl() -> CentralVenousLine:
    return CentralVenousLine(True)


@pytest.fixture
def lvf() -> LiverFailure:
    return LiverFailure(True)
