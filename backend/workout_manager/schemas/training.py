from typing import Annotated
from datetime import datetime, timedelta
from pydantic import BaseModel, ConfigDict, Field

from workout_manager.models import Exercise, Training

NonNegFloat = Annotated[float, Field(ge=0)]
NonNegInt = Annotated[int, Field(ge=0)]
# Durations come in as seconds (or ISO 8601) and go out as seconds
Duration = Annotated[timedelta, Field(ge=timedelta(0))]

class ExerciseSchema(BaseModel):
    type: Annotated[str, Field(min_length=1, max_length=120)]
    count: NonNegInt
    weight: NonNegFloat
    duration_workout: Duration | None = None
    duration_rest: Duration | None = None

    model_config = ConfigDict(from_attributes=True, ser_json_timedelta="float")

    def to_model(self) -> Exercise:
        return Exercise(**self.model_dump())

class TrainingCreate(BaseModel):
    username: Annotated[str, Field(min_length=1, max_length=120)]
    date: datetime
    tonnage: NonNegFloat
    number: NonNegInt
    total_workout_time: Duration | None = None
    total_rest_time: Duration | None = None
    exercises: list[ExerciseSchema] = []
    feedback: str | None = None
    like: bool | None = None

    model_config = ConfigDict(ser_json_timedelta="float")

    def to_model(self) -> Training:
        return Training(
            username=self.username,
            date=self.date,
            tonnage=self.tonnage,
            number=self.number,
            total_workout_time=self.total_workout_time,
            total_rest_time=self.total_rest_time,
            exercises=[e.to_model() for e in self.exercises],
            feedback=self.feedback,
            like=self.like,
        )

class TrainingRead(TrainingCreate):
    id: str

    model_config = ConfigDict(from_attributes=True, ser_json_timedelta="float")

class TrainingCreated(BaseModel):
    message: str
    id: str

class TrainingList(BaseModel):
    message: str
    trainings: list[TrainingRead]
