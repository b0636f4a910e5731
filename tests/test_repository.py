"""
Tests for the patients repository and source factory.
"""

import json

import pytest

from icuwatch.config import DataSourceConfig
from icuwatch.repository import PatientsRepository, create_data_source
from icuwatch.sources.base import DataSourceError
from icuwatch.sources.mock import MockDataSource


@pytest.fixture
def export_path(tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps({"patients": [{
        "subject_id": 42,
        "gender": "F",
        "anchor_age": 71,
        "admittime": "2024-02-01T10:00:00Z",
    }]}))
    return path


@pytest.mark.asyncio
async def test_default_source_is_mock():
    repo = PatientsRepository()
    assert repo.source_type == "mock"
    assert len(await repo.get_patients()) == 12


@pytest.mark.asyncio
async def test_from_config_mock():
    repo = await PatientsRepository.from_config(
        DataSourceConfig(type="mock", patient_count=5, seed=7)
    )
    page = await repo.get_patients_paginated(page=1, page_size=2)

    assert page.total == 5
    assert len(page.data) == 2


@pytest.mark.asyncio
async def test_seeded_configs_agree():
    config = DataSourceConfig(type="mock", patient_count=6, seed=21)
    first = await (await PatientsRepository.from_config(config)).get_patients()
    second = await (await PatientsRepository.from_config(config)).get_patients()
    assert [p.vitals for p in first] == [p.vitals for p in second]


@pytest.mark.asyncio
async def test_api_source_requires_url():
    with pytest.raises(DataSourceError) as exc_info:
        await create_data_source(DataSourceConfig(type="mimic-api"))
    assert exc_info.value.code == "CONFIG_ERROR"


@pytest.mark.asyncio
async def test_json_source_requires_path():
    with pytest.raises(DataSourceError) as exc_info:
        await create_data_source(DataSourceConfig(type="mimic-json"))
    assert exc_info.value.code == "CONFIG_ERROR"


@pytest.mark.asyncio
async def test_configure_switches_source(export_path):
    repo = PatientsRepository(MockDataSource(count=3, seed=1))
    await repo.configure(DataSourceConfig(type="mimic-json", json_path=str(export_path)))

    assert repo.source_type == "mimic-json"
    patient = await repo.get_patient_by_id("mimic-42")
    assert patient.age == 71
    assert await repo.get_vital_time_series("mimic-42", "24h") is not None

    await repo.configure(DataSourceConfig(type="mimic-api", api_url="http://mimic.test"))
    assert repo.source_type == "mimic-api"
    await repo.close()


@pytest.mark.asyncio
async def test_failed_configure_keeps_current_source():
    repo = PatientsRepository(MockDataSource(count=3, seed=1))
    with pytest.raises(DataSourceError):
        await repo.configure(DataSourceConfig(type="mimic-api"))
    assert repo.source_type == "mock"


@pytest.mark.asyncio
async def test_refresh():
    repo = PatientsRepository(MockDataSource(count=4, seed=2))
    await repo.refresh()
    assert len(await repo.get_patients()) == 4
