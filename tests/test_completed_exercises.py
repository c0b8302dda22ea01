import pytest
import uuid
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from workout_api.models.workout import CompletedExercise, Workout
from tests.factories import API


@pytest.fixture
async def workout(db_session: AsyncSession, bob) -> Workout:
    workout = Workout(user_id=bob.id)
    db_session.add(workout)
    await db_session.commit()
    return workout


@pytest.fixture
async def foreign_workout(db_session: AsyncSession, binky) -> Workout:
    workout = Workout(user_id=binky.id)
    db_session.add(workout)
    await db_session.commit()
    return workout


@pytest.fixture
def new_exercise(chest_fly, workout) -> dict:
    return {
        "exercise_id": str(chest_fly.id),
        "workout_id": str(workout.id),
        "exercise_type": "cable",
        "sets": 3,
        "reps": 12,
        "load": 225,
    }


def _url(workout_id) -> str:
    return f"{API}/workouts/{workout_id}/completed_exercises"


@pytest.mark.asyncio
async def test_add_requires_token(client: AsyncClient, workout, new_exercise):
    resp = await client.post(_url(workout.id), json=new_exercise, headers={"x-auth-token": ""})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_add_to_other_users_workout_is_forbidden(
    client: AsyncClient, db_session: AsyncSession, foreign_workout, new_exercise, bob_headers
):
    resp = await client.post(_url(foreign_workout.id), json=new_exercise, headers=bob_headers)
    assert resp.status_code == 403

    result = await db_session.execute(select(CompletedExercise))
    assert result.scalars().all() == []


@pytest.mark.asyncio
async def test_add_with_invalid_workout_id_is_not_found(client: AsyncClient, new_exercise, bob_headers):
    resp = await client.post(_url("1"), json=new_exercise, headers=bob_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_add_with_unknown_workout_id_is_not_found(client: AsyncClient, new_exercise, bob_headers):
    resp = await client.post(_url(uuid.uuid4()), json=new_exercise, headers=bob_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_add_with_invalid_exercise_id_is_bad_request(client: AsyncClient, workout, bob_headers):
    payload = {"exercise_id": "1", "exercise_type": "cable", "sets": 3, "reps": 12}
    resp = await client.post(_url(workout.id), json=payload, headers=bob_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_add_with_unknown_exercise_is_bad_request(client: AsyncClient, workout, bob_headers):
    payload = {"exercise_id": str(uuid.uuid4()), "exercise_type": "cable", "sets": 3, "reps": 12}
    resp = await client.post(_url(workout.id), json=payload, headers=bob_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["exercise_type", "sets", "reps"])
async def test_add_without_required_field_is_bad_request(
    client: AsyncClient, workout, new_exercise, bob_headers, missing
):
    payload = {k: v for k, v in new_exercise.items() if k != missing}
    resp = await client.post(_url(workout.id), json=payload, headers=bob_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [{"sets": 0}, {"reps": 0}, {"load": -5}, {"exercise_type": "trampoline"}],
)
async def test_add_with_out_of_range_values_is_bad_request(
    client: AsyncClient, workout, new_exercise, bob_headers, override
):
    resp = await client.post(_url(workout.id), json={**new_exercise, **override}, headers=bob_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_add_stores_completed_exercise_with_defaults(
    client: AsyncClient, db_session: AsyncSession, workout, chest_fly, new_exercise, bob_headers
):
    resp = await client.post(_url(workout.id), json=new_exercise, headers=bob_headers)
    assert resp.status_code == 200

    result = await db_session.execute(select(CompletedExercise).where(CompletedExercise.workout_id == workout.id))
    saved = result.scalar_one()
    assert saved.exercise_id == chest_fly.id
    assert saved.exercise_type.value == "cable"
    assert saved.sets == 3
    assert saved.reps == 12
    assert saved.load == 225
    assert saved.unilateral is False
    assert saved.mum is False


@pytest.mark.asyncio
async def test_add_returns_completed_exercise(client: AsyncClient, workout, chest_fly, new_exercise, bob_headers):
    resp = await client.post(_url(workout.id), json=new_exercise, headers=bob_headers)

    assert resp.status_code == 200
    body = resp.json()
    uuid.UUID(body["_id"])
    assert body["exercise_id"] == str(chest_fly.id)
    assert body["workout_id"] == str(workout.id)
    assert body["exercise_type"] == "cable"
    assert body["unilateral"] is False
    assert body["sets"] == 3
    assert body["reps"] == 12
    assert body["load"] == 225
    assert body["mum"] is False


@pytest.mark.asyncio
async def test_add_uses_path_workout_not_body_workout(
    client: AsyncClient, workout, foreign_workout, new_exercise, bob_headers
):
    payload = {**new_exercise, "workout_id": str(foreign_workout.id), "unilateral": True, "mum": True}
    resp = await client.post(_url(workout.id), json=payload, headers=bob_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["workout_id"] == str(workout.id)
    assert body["unilateral"] is True
    assert body["mum"] is True


@pytest.mark.asyncio
async def test_added_exercise_appears_in_workout_detail(
    client: AsyncClient, workout, new_exercise, bob_headers
):
    await client.post(_url(workout.id), json=new_exercise, headers=bob_headers)

    resp = await client.get(f"{API}/workouts/{workout.id}", headers=bob_headers)
    exercises = resp.json()["exercises"]
    assert len(exercises) == 1
    assert exercises[0]["exercise_id"]["name"] == "chest fly"
    assert exercises[0]["load"] == 225
