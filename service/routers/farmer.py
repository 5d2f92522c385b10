"""
Farmer API

Endpoints:
- POST /farmer/register - Register a farmer (multipart, documents optional)
- POST /farmer/login - Farmer login
- GET /farmer/{farmer_id} - Farmer public profile
- POST /farmer/addProduct/{farmer_id} - List a product and issue its QR code
- GET /farmer/getProducts/{farmer_id} - A farmer's products
- PUT /farmer/updateProduct/{product_id} - Edit a product
- DELETE /farmer/deleteProduct/{product_id} - Remove a product
- GET /farmer/orders/{farmer_id} - Orders received by a farmer
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from identity.registration import FARMER
from service.responses import success
from service.state import Services, get_services
from service.uploads import UploadBatch

router = APIRouter(prefix="/farmer", tags=["farmer"])


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("/register")
async def register_farmer(
    name: Optional[str] = Form(None),
    farmName: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    mobile: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    experience: Optional[str] = Form(None),
    aadhaar: Optional[str] = Form(None),
    farmingType: Optional[str] = Form(None),
    aadhaarFile: Optional[UploadFile] = File(None),
    panFile: Optional[UploadFile] = File(None),
    landProof: Optional[UploadFile] = File(None),
    leaseProof: Optional[UploadFile] = File(None),
    farmerIDProof: Optional[UploadFile] = File(None),
    organicProof: Optional[UploadFile] = File(None),
    certificate: Optional[UploadFile] = File(None),
    services: Services = Depends(get_services),
):
    """Register a farmer. Verification starts Pending."""
    profile = {
        "name": name,
        "farmName": farmName,
        "location": location,
        "mobile": mobile,
        "email": email,
        "experience": experience,
        "aadhaar": aadhaar,
        "farmingType": farmingType,
    }
    batch = UploadBatch(services.files)
    try:
        documents = await batch.save_all({
            "aadhaarFile": aadhaarFile,
            "panFile": panFile,
            "landProof": landProof,
            "leaseProof": leaseProof,
            "farmerIDProof": farmerIDProof,
            "organicProof": organicProof,
            "certificate": certificate,
        })
        farmer = services.identity.register_farmer(profile, password, documents)
    except Exception:
        batch.discard()
        raise

    return success(
        "Registration submitted. Your documents will be reviewed by our team.",
        farmerId=farmer["id"],
        verificationStatus=farmer["verificationStatus"],
        farmer=farmer,
    )


@router.post("/login")
async def login_farmer(body: LoginRequest, services: Services = Depends(get_services)):
    farmer = services.identity.authenticate(FARMER, body.email, body.password)
    return success(
        "Login successful",
        farmerId=farmer["id"],
        name=farmer["name"],
        verificationStatus=farmer["verificationStatus"],
        farmer=farmer,
    )


@router.post("/addProduct/{farmer_id}")
async def add_product(
    farmer_id: str,
    name: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    harvestDate: Optional[str] = Form(None),
    moisture: Optional[str] = Form(None),
    protein: Optional[str] = Form(None),
    pesticideResidue: Optional[str] = Form(None),
    soilPH: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    labReport: Optional[UploadFile] = File(None),
    services: Services = Depends(get_services),
):
    """
    List a product, then issue its attestation QR code.

    Uploads are removed if the listing is rejected. If only the QR code
    fails, the product stays listed with attestationStatus Failed and the
    error response carries its productId so issuance can be retried.
    """
    attrs = {
        "name": name,
        "category": category,
        "price": price,
        "quantity": quantity,
        "location": location,
    }
    attestation_attrs = {
        "harvestDate": harvestDate,
        "moisture": moisture,
        "protein": protein,
        "pesticideResidue": pesticideResidue,
        "soilPH": soilPH,
    }

    batch = UploadBatch(services.files)
    try:
        image_ref = await batch.save(image)
        lab_report_ref = await batch.save(labReport)
        product_id = services.catalog.create_product(
            farmer_id, attrs, image_ref,
            attestation_attrs=attestation_attrs,
            lab_report_ref=lab_report_ref,
        )
    except Exception:
        batch.discard()
        raise

    attestation = services.issuer.issue_attestation(product_id)
    return success(
        "Product added successfully",
        productId=product_id,
        qrCode=attestation["qrCode"],
        certificateUrl=attestation["url"],
        attestationStatus=attestation["attestationStatus"],
    )


@router.get("/getProducts/{farmer_id}")
async def get_products(farmer_id: str, services: Services = Depends(get_services)):
    products = services.catalog.list_products_by_farmer(farmer_id)
    return success(products=products, count=len(products))


@router.put("/updateProduct/{product_id}")
async def update_product(
    product_id: str,
    name: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    harvestDate: Optional[str] = Form(None),
    moisture: Optional[str] = Form(None),
    protein: Optional[str] = Form(None),
    pesticideResidue: Optional[str] = Form(None),
    soilPH: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    labReport: Optional[UploadFile] = File(None),
    services: Services = Depends(get_services),
):
    """Edit a product. Blank fields keep their stored value; the QR code is unchanged."""
    attrs = {
        "name": name,
        "category": category,
        "price": price,
        "quantity": quantity,
        "location": location,
        "harvestDate": harvestDate,
        "moisture": moisture,
        "protein": protein,
        "pesticideResidue": pesticideResidue,
        "soilPH": soilPH,
    }

    batch = UploadBatch(services.files)
    try:
        previous = services.catalog.get_product(product_id)
        image_ref = await batch.save(image)
        lab_report_ref = await batch.save(labReport)
        product = services.catalog.update_product(
            product_id, attrs, image_ref=image_ref, lab_report_ref=lab_report_ref
        )
    except Exception:
        batch.discard()
        raise

    # Replaced files are no longer referenced
    if image_ref and previous["image"] != image_ref:
        services.files.remove(previous["image"])
    if lab_report_ref and previous["labReport"] and previous["labReport"] != lab_report_ref:
        services.files.remove(previous["labReport"])

    return success("Product updated successfully", product=product)


@router.delete("/deleteProduct/{product_id}")
async def delete_product(product_id: str, services: Services = Depends(get_services)):
    product = services.issuer.withdraw_product(product_id)
    services.files.remove(product["image"])
    services.files.remove(product["labReport"])
    return success("Product deleted successfully", productId=product_id)


@router.get("/orders/{farmer_id}")
async def farmer_orders(farmer_id: str, services: Services = Depends(get_services)):
    orders = services.orders.list_orders_for_farmer(farmer_id)
    return success(orders=orders, count=len(orders))


# Declared last so the fixed paths above take precedence
@router.get("/{farmer_id}")
async def get_farmer(farmer_id: str, services: Services = Depends(get_services)):
    return success(farmer=services.identity.get_farmer(farmer_id))
