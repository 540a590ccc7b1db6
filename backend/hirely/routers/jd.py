"""JD router: generation, bias tools and saved templates."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hirely.agents import jd_generator
from hirely.database import get_db
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import feature_value, record_value
from hirely.schemas.jd import BiasFixRequest, BiasScanRequest, BiasScanResponse, JDRequest, JDResult
from hirely.schemas.records import JDTemplateCreate, JDTemplateResponse
from hirely.services import records
from hirely.services.bias_scanner import detect_bias, fix_all_bias, fix_bias

router = APIRouter(prefix="/api/jd", tags=["jd"])


def _scan(text: str) -> BiasScanResponse:
    flags = detect_bias(text)
    return BiasScanResponse(text=text, flags=flags, clean=not flags)


@router.get("/options")
def options():
    """Styles, seniority levels and departments offered by the generator form."""
    return {
        "styles": jd_generator.JD_STYLES,
        "seniority_levels": jd_generator.SENIORITY_LEVELS,
        "departments": jd_generator.DEPARTMENTS,
    }


@router.post("/generate", response_model=JDResult)
async def generate(req: JDRequest, current_user: User = Depends(get_current_user)):
    return feature_value(await jd_generator.generate_jd(req))


@router.post("/bias/scan", response_model=BiasScanResponse)
def scan(req: BiasScanRequest):
    return _scan(req.text)


@router.post("/bias/fix", response_model=BiasScanResponse)
def fix_one(req: BiasFixRequest):
    """Replace one flagged term and rescan."""
    return _scan(fix_bias(req.text, req.term, req.suggestion))


@router.post("/bias/fix-all", response_model=BiasScanResponse)
def fix_all(req: BiasScanRequest):
    return _scan(fix_all_bias(req.text))


# ── Templates ────────────────────────────────────────────────────────────────

@router.get("/templates", response_model=list[JDTemplateResponse])
def list_templates(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return record_value(records.list_jd_templates(db, current_user.id))


@router.post("/templates", response_model=JDTemplateResponse, status_code=201)
def save_template(
    req: JDTemplateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.save_jd_template(db, current_user.id, req))


@router.delete("/templates/{template_id}", status_code=204)
def delete_template(
    template_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record_value(records.delete_jd_template(db, current_user.id, template_id))
