"""
FastAPI Backend for the Finbaba Statement Analyzer
RESTful API endpoints for uploading bank statements and tracking savings goals
"""

from fastapi import FastAPI, File, UploadFile, Form, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Optional
from pathlib import Path
from datetime import datetime
import sys

# Add backend to path
backend_path = Path(__file__).parent.parent / 'backend'
sys.path.insert(0, str(backend_path))

# Import backend modules
from config import config
from errors import UnreadableInputError, UnsupportedFormatError
from loaders.staging import staged_upload
from logging_config import get_logger, setup_logging
from pipeline import IngestionPipeline, SourceFormat
from storage.user_store import GoalNotFoundError, UserStore

setup_logging()
logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Finbaba API",
    description="Extract, categorize and summarize transactions from bank statements",
    version=config.VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory user data, keyed by user id
store = UserStore()


# ----------------------------
# Pydantic models
# ----------------------------
class SavingsGoalIn(BaseModel):
    userId: str = config.DEFAULT_USER_ID
    name: str = Field(..., min_length=1)
    target: float = Field(..., gt=0, allow_inf_nan=False)
    deadline: Optional[str] = Field(None, description="YYYY-MM-DD")


class SavingsGoalProgress(BaseModel):
    userId: str = config.DEFAULT_USER_ID
    amount: float = Field(..., allow_inf_nan=False)


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {
        "message": f"{config.APP_NAME} API",
        "version": config.VERSION,
        "endpoints": {
            "POST /api/upload": "Upload a statement and compute its financial summary",
            "GET /api/financial-data/{user_id}": "Latest financial summary for a user",
            "POST /api/savings-goal": "Create a savings goal",
            "GET /api/savings-goal/{user_id}": "List a user's savings goals",
            "PUT /api/savings-goal/{goal_id}": "Update savings goal progress",
            "GET /api/health": "Health check"
        },
        "settings": config.to_dict()
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "OK",
        "message": f"{config.APP_NAME} API is running",
        "timestamp": datetime.now().isoformat()
    }


@app.post("/api/upload")
def upload_statement(
    bankStatement: UploadFile = File(..., description="CSV, Excel, PDF or text statement"),
    userId: str = Form(config.DEFAULT_USER_ID, description="User the summary belongs to")
):
    """
    Process a bank statement and store its financial summary for the user.

    - **bankStatement**: statement file (.csv, .xlsx, .xls, .pdf, .txt)
    - **userId**: owner of the summary; a new upload replaces the previous one
    """
    filename = bankStatement.filename or ""
    content = bankStatement.file.read()

    is_valid, error = config.validate_file(filename, len(content))
    if not is_valid:
        raise HTTPException(status_code=400, detail=error)

    try:
        source_format = SourceFormat.from_filename(filename)
        with staged_upload(content, suffix=Path(filename).suffix.lower()) as staged_path:
            result = IngestionPipeline().process_file(staged_path, source_format)

    except UnsupportedFormatError as e:
        logger.warning(f"Rejected {filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except UnreadableInputError as e:
        logger.warning(f"Unreadable upload {filename}: {e}")
        raise HTTPException(status_code=422, detail=f"Error processing file: {e}")
    except Exception as e:
        logger.error(f"Error processing {filename}: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error processing file: {str(e)}")

    financial_data = result.to_dict()
    store.save_financial_data(userId, financial_data)

    logger.info(f"Processed {filename} for '{userId}': {len(result.transactions)} transactions")
    return {
        "success": True,
        "message": "Bank statement processed successfully",
        "data": financial_data
    }


@app.get("/api/financial-data/{user_id}")
async def get_financial_data(user_id: str):
    """Return the latest financial summary stored for a user."""
    data = store.get_financial_data(user_id)
    if data is None:
        raise HTTPException(status_code=404, detail="No data found for user")
    return data


@app.post("/api/savings-goal")
async def add_savings_goal(goal_in: SavingsGoalIn):
    """Create a savings goal with no progress."""
    goal = store.add_goal(goal_in.userId, goal_in.name, goal_in.target, goal_in.deadline)
    return {
        "success": True,
        "goal": goal.to_dict()
    }


@app.get("/api/savings-goal/{user_id}")
async def list_savings_goals(user_id: str):
    """List a user's savings goals."""
    goals = store.get_goals(user_id)
    return {
        "total_goals": len(goals),
        "goals": [goal.to_dict() for goal in goals]
    }


@app.put("/api/savings-goal/{goal_id}")
async def update_savings_goal(goal_id: int, progress: SavingsGoalProgress):
    """Update goal progress; the amount is clamped to the goal's target."""
    try:
        goal = store.update_goal(progress.userId, goal_id, progress.amount)
    except GoalNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {
        "success": True,
        "goal": goal.to_dict()
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
