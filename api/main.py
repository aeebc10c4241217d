import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from addresses import router as addresses_router
from core import db, errors, settings
from customers import router as customers_router

logging.basicConfig(
    level=settings.log_level(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool and tables once per process.
    await db.init_pool()
    try:
        await db.ensure_schema(db.get_database())
        logger.info("api_ready cors_origins=%s", ",".join(settings.cors_origins()))
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

origins = settings.cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    # Browsers reject credentials with a wildcard origin.
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(errors.ServiceError)
async def service_error_handler(_: Request, exc: errors.ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in item.get('loc', ()))}: {item.get('msg', 'invalid')}"
        for item in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": "Invalid request.", "error": problems})


app.include_router(customers_router.router, tags=["customers"])
app.include_router(addresses_router.router, tags=["addresses"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "customer api"}
