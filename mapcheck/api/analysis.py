from fastapi import APIRouter, HTTPException
from mapcheck.core.errors import MappingAnalysisError
from mapcheck.models.schemas import AnalyzeRequest, AnalyzeResponse
from mapcheck.services.analysis_workflow import perform_analysis


router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_mappings(payload: AnalyzeRequest):
    try:
        return perform_analysis(payload)
    except MappingAnalysisError as e:
        raise HTTPException(status_code=400, detail=e.to_response())
    except ValueError as e:
        # unknown entity / view model in an explicit pair
        raise HTTPException(status_code=400, detail=str(e))
