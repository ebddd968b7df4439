"""Job & application routes — HTTP contract over RecordStore.

Invariants:
    - Role/ownership failures are 403, missing session 401, duplicates 409
    - DELETE /jobs/{id} is 204 and takes the job's applications with it
"""

import pytest

EMPLOYER = {
    "name": "Erin Employer", "email": "e@x.com", "role": "employer",
    "company": "Acme", "password": "pw",
}
JOBSEEKER = {
    "name": "Sam Seeker", "email": "s@x.com", "role": "jobseeker",
    "title": "Developer", "skills": ["python"], "password": "pw",
}
JOB = {
    "title": "Dev", "company": "Acme", "location": "Remote",
    "description": "Build things.", "requirements": ["Python"], "type": "full-time",
}


async def _login(client, email):
    await client.post("/api/v1/auth/logout")
    res = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": "pw"},
    )
    assert res.status_code == 200


@pytest.fixture
async def job(client):
    """Employer and seeker registered, one job posted; seeker is logged in."""
    await client.post("/api/v1/auth/register", json=EMPLOYER)
    res = await client.post("/api/v1/jobs", json=JOB)
    assert res.status_code == 201
    await client.post("/api/v1/auth/logout")
    await client.post("/api/v1/auth/register", json=JOBSEEKER)
    return res.json()


async def test_post_job_requires_employer(client):
    res = await client.post("/api/v1/jobs", json=JOB)
    assert res.status_code == 401

    await client.post("/api/v1/auth/register", json=JOBSEEKER)
    res = await client.post("/api/v1/jobs", json=JOB)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"


async def test_board_listing_and_filters(client, job):
    assert [j["id"] for j in (await client.get("/api/v1/jobs")).json()] == [job["id"]]
    assert (await client.get("/api/v1/jobs", params={"q": "acme"})).json()[0]["id"] == job["id"]
    assert (await client.get("/api/v1/jobs", params={"type": "contract"})).json() == []

    res = await client.get("/api/v1/jobs", params={"type": "gig"})
    assert res.status_code == 400


async def test_get_job_and_missing_job(client, job):
    res = await client.get(f"/api/v1/jobs/{job['id']}")
    assert res.json()["title"] == "Dev"
    assert res.json()["is_active"] is True

    res = await client.get("/api/v1/jobs/job_missing")
    assert res.status_code == 404


async def test_apply_then_duplicate(client, job):
    res = await client.post(
        f"/api/v1/jobs/{job['id']}/applications", json={"cover_letter": "Hi"},
    )
    assert res.status_code == 201
    assert res.json()["status"] == "pending"
    assert res.json()["applicant_name"] == "Sam Seeker"

    res = await client.post(f"/api/v1/jobs/{job['id']}/applications", json={})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_APPLICATION"

    mine = (await client.get("/api/v1/applications/mine")).json()
    assert len(mine) == 1


async def test_seeker_cannot_edit_job(client, job):
    res = await client.patch(f"/api/v1/jobs/{job['id']}", json={"title": "Mine now"})
    assert res.status_code == 403


async def test_owner_edits_and_deactivates_job(client, job):
    await _login(client, "e@x.com")

    res = await client.patch(
        f"/api/v1/jobs/{job['id']}", json={"title": "Senior Dev", "is_active": False},
    )

    assert res.status_code == 200
    assert res.json()["title"] == "Senior Dev"
    assert (await client.get("/api/v1/jobs")).json() == []
    listed = (await client.get("/api/v1/jobs", params={"include_inactive": True})).json()
    assert listed[0]["title"] == "Senior Dev"
    assert [j["id"] for j in (await client.get("/api/v1/jobs/mine")).json()] == [job["id"]]


async def test_status_review_flow(client, job):
    application = (
        await client.post(f"/api/v1/jobs/{job['id']}/applications", json={})
    ).json()
    url = f"/api/v1/applications/{application['id']}/status"

    res = await client.patch(url, json={"status": "hired"})
    assert res.status_code == 403

    await _login(client, "e@x.com")
    res = await client.patch(url, json={"status": "interview"})
    assert res.status_code == 200
    assert res.json()["status"] == "interview"

    res = await client.patch(url, json={"status": "ghosted"})
    assert res.status_code == 400

    listed = await client.get(
        f"/api/v1/jobs/{job['id']}/applications", params={"status": "interview"},
    )
    assert [a["id"] for a in listed.json()] == [application["id"]]

    summary = (await client.get(f"/api/v1/jobs/{job['id']}/applications/summary")).json()
    assert summary["total"] == 1
    assert summary["by_status"]["interview"] == 1
    assert summary["by_status"]["pending"] == 0


async def test_delete_job_cascades(client, job):
    application = (
        await client.post(f"/api/v1/jobs/{job['id']}/applications", json={})
    ).json()

    res = await client.delete(f"/api/v1/jobs/{job['id']}")
    assert res.status_code == 403

    await _login(client, "e@x.com")
    res = await client.delete(f"/api/v1/jobs/{job['id']}")
    assert res.status_code == 204

    assert (await client.get(f"/api/v1/jobs/{job['id']}")).status_code == 404
    assert (await client.get(f"/api/v1/jobs/{job['id']}/applications")).json() == []
    res = await client.get(f"/api/v1/applications/{application['id']}")
    assert res.status_code == 404
