from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rebase_ledger.core.config import settings
from rebase_ledger.core.logging_config import configure_logging
from rebase_ledger.api.routes.events import router as events_router
from rebase_ledger.api.routes.holders import router as holders_router
from rebase_ledger.api.routes.rates import router as rates_router
from rebase_ledger.api.routes.clamps import router as clamps_router

app = FastAPI()


@app.on_event("startup")
def setup_logging():
    configure_logging(settings.log_level)


origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}

app.include_router(events_router)
app.include_router(holders_router)
app.include_router(rates_router)
app.include_router(clamps_router)
