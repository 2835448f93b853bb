"""Admission wave API."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from campus_cms.api.v1.dependencies import AdminActor, get_admission_wave_service
from campus_cms.application.use_cases.admission_waves import AdmissionWaveService, WaveWrite
from campus_cms.schemas.common import MessageResponse
from campus_cms.schemas.resources import AdmissionWaveRequest, AdmissionWaveResponse

router = APIRouter()

Service = Annotated[AdmissionWaveService, Depends(get_admission_wave_service)]


def _to_write(body: AdmissionWaveRequest) -> WaveWrite:
    return WaveWrite(body.name, body.starts_on, body.ends_on, body.registration_fee)


@router.get("", response_model=list[AdmissionWaveResponse])
async def list_waves(service: Service) -> list[dict[str, Any]]:
    return await service.list()


@router.post("", response_model=AdmissionWaveResponse, status_code=201)
async def create_wave(
    body: AdmissionWaveRequest, service: Service, actor: AdminActor
) -> dict[str, Any]:
    return await service.create(_to_write(body), actor)


@router.put("/{wave_id}", response_model=AdmissionWaveResponse)
async def update_wave(
    wave_id: int, body: AdmissionWaveRequest, service: Service, actor: AdminActor
) -> dict[str, Any]:
    return await service.update(wave_id, _to_write(body), actor)


@router.delete("/{wave_id}", response_model=MessageResponse)
async def delete_wave(wave_id: int, service: Service, actor: AdminActor) -> MessageResponse:
    await service.delete(wave_id, actor)
    return MessageResponse(message="Admission wave deleted")
