from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, status
from workout_manager.db import PersistenceService, get_persistence
from workout_manager.schemas.training import TrainingCreate, TrainingCreated, TrainingList, TrainingRead
from workout_manager.schemas.user import MessageRead

router = APIRouter(prefix="/trainings", tags=["trainings"])

@router.post("/add", response_model=TrainingCreated, status_code=status.HTTP_201_CREATED)
def add_training(payload: TrainingCreate, db: PersistenceService = Depends(get_persistence)):
    training_id = db.create_training(payload.to_model())
    return {"message": "training added", "id": training_id}

@router.get("/get_all/{username}", response_model=TrainingList)
def list_user_trainings(username: str, db: PersistenceService = Depends(get_persistence)):
    # An unknown user simply has no trainings
    trainings = db.list_trainings(username)
    return {
        "message": "trainings fetched",
        "trainings": [TrainingRead.model_validate(t) for t in trainings],
    }

@router.delete("/delete/{training_id}", response_model=MessageRead)
def delete_training(training_id: str, db: PersistenceService = Depends(get_persistence)):
    if not ObjectId.is_valid(training_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid training id")
    db.delete_training(training_id)
    return {"message": "training deleted"}
