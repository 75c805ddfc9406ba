import logging
import uuid
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List
from fastapi import FastAPI, Depends, HTTPException
from common.error_handling import add_error_handlers
from common.schemas import PaymentCount, PaymentRequest, PaymentResponse
from common.settings import settings
from payment_service.context import PaymentContext, ProcessingMode
from payment_service.db import init_db
from payment_service.service import PaymentService, build_payment_service

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Payment service started, authorization threshold={settings.payment_author_threshold}")
    yield

app = FastAPI(title="Payment Service", version="1.0.0", lifespan=lifespan)
add_error_handlers(app)

@lru_cache
def get_payment_service() -> PaymentService:
    return build_payment_service()

@app.post("/payments", response_model=PaymentResponse, status_code=201)
def accept_payment(request: PaymentRequest, service: PaymentService = Depends(get_payment_service)):
    """Decide, record and track a card payment."""
    context = PaymentContext(
        pos_id=request.pos_id,
        card_number=request.card_number,
        expiry_date=request.expiry_date,
        amount=request.amount,
        processing_mode=ProcessingMode(request.processing_mode),
    )
    if request.date_time is not None:
        context.date_time = request.date_time
    service.accept(context)
    return service.find_by_id(context.id)

@app.get("/payments/count", response_model=PaymentCount)
def count_payments(service: PaymentService = Depends(get_payment_service)):
    return {"count": service.count()}

@app.get("/payments/{payment_id}", response_model=PaymentResponse)
def get_payment(payment_id: uuid.UUID, service: PaymentService = Depends(get_payment_service)):
    payment = service.find_by_id(payment_id)
    if payment is None:
        raise HTTPException(404, f"payment {payment_id} not found")
    return payment

@app.get("/payments", response_model=List[PaymentResponse])
def list_payments(service: PaymentService = Depends(get_payment_service)):
    return service.find_all()

@app.get("/health")
async def health():
    return {"ok": True, "service": "payment"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
