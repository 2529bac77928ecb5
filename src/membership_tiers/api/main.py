from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add src to path for internal imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from membership_tiers import __version__
from membership_tiers.config.settings import get_settings
from membership_tiers.engine.tier_table import validate_table
from membership_tiers.api.tiers_api import router as tiers_router

app = FastAPI(
    title="Membership Tiers API",
    description="Read-only pricing and benefits for community membership tiers",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(tiers_router)


@app.get("/")
async def root():
    return {"status": "online", "message": "Membership Tiers API Active"}


@app.get("/system/status")
async def get_status():
    try:
        settings = get_settings()
        validation = validate_table()
        return {
            "version": __version__,
            "currency": settings.currency,
            "table_valid": validation.valid,
            "errors": validation.errors,
            "warnings": validation.warnings,
        }
    except Exception as e:
        import traceback
        print(traceback.format_exc())
        raise HTTPException(status_code=500, detail=str(e))
