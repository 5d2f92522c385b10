"""
Identity Store

Farmer and consumer registration, login and public profile lookup.
Credentials are stored only as bcrypt hashes and never leave this module.
"""

import logging
import re
from typing import Dict, Any, Optional

from sqlalchemy.exc import IntegrityError

from common.errors import ValidationError, DuplicateIdentity, InvalidCredentials, NotFound
from database import crud
from database.connection import Database
from database.models import Farmer, Consumer, PENDING, FARMING_TYPES
from identity.passwords import hash_password, verify_password, DEFAULT_ROUNDS, MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")

FARMER = "farmer"
CONSUMER = "consumer"

# Upload field name -> Farmer column
FARMER_DOCUMENT_FIELDS = {
    "aadhaarFile": "aadhaar_file",
    "panFile": "pan_file",
    "landProof": "land_proof",
    "leaseProof": "lease_proof",
    "farmerIDProof": "farmer_id_proof",
    "organicProof": "organic_proof",
    "certificate": "certificate",
}


def _clean(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_email(email) -> Optional[str]:
    email = _clean(email)
    return email.lower() if email else None


def farmer_public(farmer: Farmer) -> Dict[str, Any]:
    """Public farmer record (never includes the credential hash)."""
    return {
        "id": farmer.id,
        "name": farmer.name,
        "farmName": farmer.farm_name,
        "location": farmer.location,
        "mobile": farmer.mobile,
        "experience": farmer.experience or 0,
        "email": farmer.email,
        "aadhaar": farmer.aadhaar,
        "documents": {
            field: getattr(farmer, column)
            for field, column in FARMER_DOCUMENT_FIELDS.items()
        },
        "farmingType": farmer.farming_type or "",
        "verificationStatus": farmer.verification_status,
        "verifiedAt": farmer.verified_at.isoformat() if farmer.verified_at else None,
        "adminNotes": farmer.admin_notes,
        "createdAt": farmer.created_at.isoformat() if farmer.created_at else None,
    }


def consumer_public(consumer: Consumer) -> Dict[str, Any]:
    return {
        "id": consumer.id,
        "name": consumer.name,
        "email": consumer.email,
        "mobile": consumer.mobile,
    }


class IdentityStore:
    """Registration and authentication for farmers and consumers."""

    def __init__(self, database: Database, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self.database = database
        self.bcrypt_rounds = bcrypt_rounds
        # Compared against on unknown emails so both login failures cost one bcrypt check
        self._dummy_hash = hash_password("agridirect-unknown-account", bcrypt_rounds)

    def _check_common(self, profile: Dict[str, Any], credential, required: tuple) -> Dict[str, Any]:
        values = {field: _clean(profile.get(field)) for field in required}
        if not all(values.values()) or not credential:
            missing = [field for field, value in values.items() if not value]
            if not credential:
                missing.append("password")
            logger.warning(f"Registration rejected, missing fields: {', '.join(missing)}")
            raise ValidationError("Missing required fields")
        if len(str(credential).encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        if not MOBILE_PATTERN.match(values["mobile"]):
            raise ValidationError("Mobile must be 10 digits")
        values["email"] = values["email"].lower()
        return values

    def register_farmer(
        self,
        profile: Dict[str, Any],
        credential: str,
        documents: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Register a farmer with status Pending.

        Args:
            profile: name, farmName, location, mobile, email, and optional
                experience, aadhaar, farmingType
            credential: Plaintext password
            documents: Upload field name -> stored file reference

        Returns:
            Public farmer record

        Raises:
            ValidationError: Missing fields, bad mobile, experience or farming type
            DuplicateIdentity: Email already registered
        """
        values = self._check_common(
            profile, credential, ("name", "farmName", "location", "mobile", "email")
        )

        experience = _clean(profile.get("experience"))
        if experience is None:
            experience = 0
        else:
            try:
                experience = int(experience)
            except ValueError:
                raise ValidationError("Experience must be a whole number of years")
            if experience < 0:
                raise ValidationError("Experience cannot be negative")

        farming_type = _clean(profile.get("farmingType")) or ""
        if farming_type not in FARMING_TYPES:
            raise ValidationError(
                f"Farming type must be one of: {', '.join(t for t in FARMING_TYPES if t)}"
            )

        farmer_data = {
            "name": values["name"],
            "farm_name": values["farmName"],
            "location": values["location"],
            "mobile": values["mobile"],
            "email": values["email"],
            "experience": experience,
            "aadhaar": _clean(profile.get("aadhaar")),
            "farming_type": farming_type,
            "verification_status": PENDING,
            "password_hash": hash_password(credential, self.bcrypt_rounds),
        }
        for field, column in FARMER_DOCUMENT_FIELDS.items():
            farmer_data[column] = (documents or {}).get(field)

        try:
            with self.database.session() as db:
                if crud.get_farmer_by_email(db, values["email"]):
                    raise DuplicateIdentity()
                farmer = crud.create_farmer(db, farmer_data)
                record = farmer_public(farmer)
        except IntegrityError as e:
            # Concurrent registration won the unique index
            logger.warning(f"Duplicate farmer email on insert: {e.orig}")
            raise DuplicateIdentity("Email already registered (duplicate)")

        logger.info(f"Registered farmer {record['id']} ({record['email']}), verification pending")
        return record

    def register_consumer(self, profile: Dict[str, Any], credential: str) -> Dict[str, Any]:
        """Register a consumer. Same validation and duplicate rules as farmers."""
        values = self._check_common(profile, credential, ("name", "email", "mobile"))

        try:
            with self.database.session() as db:
                if crud.get_consumer_by_email(db, values["email"]):
                    raise DuplicateIdentity()
                consumer = crud.create_consumer(db, {
                    "name": values["name"],
                    "email": values["email"],
                    "mobile": values["mobile"],
                    "password_hash": hash_password(credential, self.bcrypt_rounds),
                })
                record = consumer_public(consumer)
        except IntegrityError as e:
            logger.warning(f"Duplicate consumer email on insert: {e.orig}")
            raise DuplicateIdentity("Email already registered (duplicate)")

        logger.info(f"Registered consumer {record['id']} ({record['email']})")
        return record

    def authenticate(self, kind: str, email: str, credential: str) -> Dict[str, Any]:
        """
        Check credentials for a farmer or consumer.

        Unknown email and wrong password raise the same InvalidCredentials so
        callers cannot tell which accounts exist.
        """
        lookup = self._lookup(kind)
        email = normalize_email(email)
        with self.database.session() as db:
            identity = lookup(db, email) if email else None
            password_hash = identity.password_hash if identity is not None else self._dummy_hash
            if not verify_password(credential or "", password_hash) or identity is None:
                logger.warning(f"Failed {kind} login attempt")
                raise InvalidCredentials()
            record = farmer_public(identity) if kind == FARMER else consumer_public(identity)

        logger.info(f"{kind.title()} {record['id']} logged in")
        return record

    def email_exists(self, kind: str, email: str) -> bool:
        lookup = self._lookup(kind)
        email = normalize_email(email)
        if not email:
            raise ValidationError("Email is required")
        with self.database.session() as db:
            return lookup(db, email) is not None

    def get_farmer(self, farmer_id: str) -> Dict[str, Any]:
        with self.database.session() as db:
            farmer = crud.get_farmer(db, farmer_id)
            if not farmer:
                raise NotFound("Farmer not found")
            return farmer_public(farmer)

    def get_consumer(self, consumer_id: str) -> Dict[str, Any]:
        with self.database.session() as db:
            consumer = crud.get_consumer(db, consumer_id)
            if not consumer:
                raise NotFound("Consumer not found")
            return consumer_public(consumer)

    @staticmethod
    def _lookup(kind: str):
        if kind == FARMER:
            return crud.get_farmer_by_email
        if kind == CONSUMER:
            return crud.get_consumer_by_email
        raise ValidationError(f"Unknown identity kind: {kind}")
