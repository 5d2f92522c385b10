"""
Consumer API

Endpoints:
- POST /consumer/register - Register a consumer
- POST /consumer/login - Consumer login
- POST /consumer/check-email - Whether an email is already registered
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from identity.registration import CONSUMER
from service.responses import success
from service.state import Services, get_services

router = APIRouter(prefix="/consumer", tags=["consumer"])


class ConsumerRegistration(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    mobile: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class EmailCheck(BaseModel):
    email: Optional[str] = None


@router.post("/register")
async def register_consumer(body: ConsumerRegistration, services: Services = Depends(get_services)):
    consumer = services.identity.register_consumer(
        {"name": body.name, "email": body.email, "mobile": body.mobile},
        body.password,
    )
    return success("Registration successful", consumerId=consumer["id"], consumer=consumer)


@router.post("/login")
async def login_consumer(body: LoginRequest, services: Services = Depends(get_services)):
    consumer = services.identity.authenticate(CONSUMER, body.email, body.password)
    return success("Login successful", consumerId=consumer["id"], name=consumer["name"], consumer=consumer)


@router.post("/check-email")
async def check_email(body: EmailCheck, services: Services = Depends(get_services)):
    return success(exists=services.identity.email_exists(CONSUMER, body.email))
