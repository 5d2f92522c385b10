"""
Identity Store Tests

Farmer and consumer registration, duplicate detection and login.
"""

import pytest

from common.errors import DuplicateIdentity, InvalidCredentials, NotFound, ValidationError
from conftest import farmer_profile, consumer_profile
from database import crud
from identity.passwords import hash_password, verify_password
from identity.registration import FARMER, CONSUMER


class TestPasswords:

    def test_hash_is_salted_and_verifiable(self):
        first = hash_password("wheat-2024", rounds=4)
        second = hash_password("wheat-2024", rounds=4)
        assert first != second
        assert first != "wheat-2024"
        assert verify_password("wheat-2024", first)
        assert not verify_password("wrong", first)

    def test_verify_rejects_empty_or_garbage_hash(self):
        assert not verify_password("anything", "")
        assert not verify_password("anything", "not-a-bcrypt-hash")


class TestFarmerRegistration:

    def test_register_starts_pending(self, identity):
        """New farmers start Pending with no verifiedAt."""
        farmer = identity.register_farmer(farmer_profile(), "s3cret-pass")

        assert crud.is_valid_id(farmer["id"])
        assert farmer["verificationStatus"] == "Pending"
        assert farmer["verifiedAt"] is None
        assert farmer["experience"] == 12
        assert farmer["farmingType"] == "Natural/Organic"
        assert "password" not in farmer and "passwordHash" not in farmer

    def test_credential_stored_as_hash(self, identity, database):
        farmer = identity.register_farmer(farmer_profile(), "s3cret-pass")
        with database.session() as db:
            stored = crud.get_farmer(db, farmer["id"]).password_hash
        assert stored != "s3cret-pass"
        assert verify_password("s3cret-pass", stored)

    def test_documents_are_recorded(self, identity):
        farmer = identity.register_farmer(
            farmer_profile(), "s3cret-pass",
            documents={"aadhaarFile": "/uploads/1-aadhaar.pdf", "organicProof": "/uploads/2-organic.pdf"},
        )
        assert farmer["documents"]["aadhaarFile"] == "/uploads/1-aadhaar.pdf"
        assert farmer["documents"]["organicProof"] == "/uploads/2-organic.pdf"
        assert farmer["documents"]["panFile"] is None

    def test_duplicate_email_rejected(self, identity):
        identity.register_farmer(farmer_profile(), "s3cret-pass")
        with pytest.raises(DuplicateIdentity):
            identity.register_farmer(farmer_profile(email="RAVI@example.com", mobile="9000000000"), "other")

    @pytest.mark.parametrize("mobile", ["98765", "98765432100", "98765abcde", "١٢٣٤٥٦٧٨٩٠"])
    def test_mobile_must_be_ten_digits(self, identity, mobile):
        with pytest.raises(ValidationError, match="10 digits"):
            identity.register_farmer(farmer_profile(mobile=mobile), "s3cret-pass")

    def test_overlong_password_rejected(self, identity):
        """bcrypt cannot hash more than 72 bytes, so longer passphrases are a validation error."""
        passphrase = "correct horse battery staple " * 3
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            identity.register_farmer(farmer_profile(), passphrase)
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            identity.register_consumer(consumer_profile(), "\u00e9" * 37)

        farmer = identity.register_farmer(farmer_profile(), "x" * 72)
        assert identity.authenticate(FARMER, "ravi@example.com", "x" * 72)["id"] == farmer["id"]

    def test_missing_required_fields(self, identity):
        with pytest.raises(ValidationError, match="Missing required fields"):
            identity.register_farmer(farmer_profile(farmName="  "), "s3cret-pass")
        with pytest.raises(ValidationError, match="Missing required fields"):
            identity.register_farmer(farmer_profile(), "")

    def test_experience_and_farming_type_validated(self, identity):
        with pytest.raises(ValidationError):
            identity.register_farmer(farmer_profile(experience="-2"), "s3cret-pass")
        with pytest.raises(ValidationError):
            identity.register_farmer(farmer_profile(experience="ten"), "s3cret-pass")
        with pytest.raises(ValidationError, match="Farming type"):
            identity.register_farmer(farmer_profile(farmingType="Hydroponic"), "s3cret-pass")

    def test_get_farmer_unknown_or_malformed(self, identity):
        with pytest.raises(NotFound):
            identity.get_farmer("not-an-id")
        with pytest.raises(NotFound):
            identity.get_farmer("0" * 32)


class TestConsumerRegistration:

    def test_register_and_check_email(self, identity):
        consumer = identity.register_consumer(consumer_profile(), "buyer-pass")

        assert consumer["email"] == "anita@example.com"
        assert "verificationStatus" not in consumer
        assert identity.email_exists(CONSUMER, "Anita@Example.com")
        assert not identity.email_exists(CONSUMER, "someone@example.com")

    def test_duplicate_consumer_email(self, identity):
        identity.register_consumer(consumer_profile(), "buyer-pass")
        with pytest.raises(DuplicateIdentity):
            identity.register_consumer(consumer_profile(), "buyer-pass")

    def test_farmer_and_consumer_emails_are_separate(self, identity):
        """The same email may register once as a farmer and once as a consumer."""
        identity.register_farmer(farmer_profile(email="shared@example.com"), "s3cret-pass")
        consumer = identity.register_consumer(consumer_profile(email="shared@example.com"), "buyer-pass")
        assert consumer["email"] == "shared@example.com"


class TestAuthentication:

    def test_login_success(self, identity, farmer):
        result = identity.authenticate(FARMER, "Ravi@Example.com", "s3cret-pass")
        assert result["id"] == farmer["id"]
        assert result["verificationStatus"] == "Pending"

    def test_wrong_password_and_unknown_email_look_the_same(self, identity, farmer):
        with pytest.raises(InvalidCredentials) as wrong_password:
            identity.authenticate(FARMER, "ravi@example.com", "guess")
        with pytest.raises(InvalidCredentials) as unknown_email:
            identity.authenticate(FARMER, "nobody@example.com", "guess")
        assert wrong_password.value.message == unknown_email.value.message

    def test_consumer_cannot_login_as_farmer(self, identity, consumer):
        with pytest.raises(InvalidCredentials):
            identity.authenticate(FARMER, "anita@example.com", "buyer-pass")
        assert identity.authenticate(CONSUMER, "anita@example.com", "buyer-pass")["id"] == consumer["id"]

    def test_unknown_email_still_checks_a_hash(self, identity, farmer, monkeypatch):
        """Both login failures run one bcrypt comparison, so timing does not reveal accounts."""
        from identity import registration

        checked = []

        def counting_verify(password, password_hash):
            checked.append(password_hash)
            return verify_password(password, password_hash)

        monkeypatch.setattr(registration, "verify_password", counting_verify)
        with pytest.raises(InvalidCredentials):
            identity.authenticate(FARMER, "nobody@example.com", "guess")
        with pytest.raises(InvalidCredentials):
            identity.authenticate(FARMER, "ravi@example.com", "guess")

        assert len(checked) == 2
        assert all(h.startswith("$2") for h in checked)
