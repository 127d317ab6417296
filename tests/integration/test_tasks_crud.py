"""
API CRUD Tests for Task endpoints.

This module tests the Create, Read, Update, Delete operations
for the /v1/tasks endpoints. Each test follows the AAA pattern:
- Arrange: Set up test data and preconditions
- Act: Perform the action being tested
- Assert: Verify the expected outcomes
"""

import pytest
import json
from task_manager.models import TaskStatus

pytestmark = pytest.mark.integration


class TestGetTasks:
    """Tests for GET /v1/tasks endpoint."""

    def test_get_tasks_returns_empty_list_when_no_tasks(self, client, db_session):
        # Act
        response = client.get("/v1/tasks")

        # Assert
        assert response.status_code == 200
        assert json.loads(response.data) == []

    def test_get_tasks_returns_all_tasks_in_creation_order(
        self, client, db_session, multiple_tasks
    ):
        # Act
        response = client.get("/v1/tasks")

        # Assert
        assert response.status_code == 200
        data = json.loads(response.data)
        assert [task["id"] for task in data] == [task.id for task in multiple_tasks]

    def test_get_tasks_with_status_filter(self, client, db_session, multiple_tasks):
        # Act
        response = client.get("/v1/tasks?status=in-progress")

        # Assert
        assert response.status_code == 200
        data = json.loads(response.data)
        assert len(data) == 1
        assert data[0]["status"] == "in-progress"

    def test_get_tasks_with_search(self, client, db_session, multiple_tasks):
        # Act
        response = client.get("/v1/tasks", query_string={"search": "REPORT"})

        # Assert
        data = json.loads(response.data)
        assert {task["title"] for task in data} == {
            "Write quarterly report",
            "Review pull request",
        }

    def test_get_tasks_with_search_and_status(self, client, db_session, multiple_tasks):
        # Act
        response = client.get(
            "/v1/tasks", query_string={"search": "foo", "status": "completed"}
        )

        # Assert
        data = json.loads(response.data)
        assert [task["title"] for task in data] == ["Buy groceries"]

    def test_get_tasks_with_unknown_status_returns_empty_list(
        self, client, db_session, multiple_tasks
    ):
        # Act
        response = client.get("/v1/tasks?status=archived")

        # Assert
        assert response.status_code == 200
        assert json.loads(response.data) == []


class TestGetTask:
    """Tests for GET /v1/tasks/<id> endpoint."""

    def test_get_task_returns_task_by_id(self, client, db_session, sample_task):
        # Act
        response = client.get(f"/v1/tasks/{sample_task.id}")

        # Assert
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["id"] == sample_task.id
        assert data["title"] == sample_task.title
        assert data["description"] == sample_task.description

    def test_get_task_returns_404_for_nonexistent_task(self, client, db_session):
        # Act
        response = client.get("/v1/tasks/99999")

        # Assert
        assert response.status_code == 404
        data = json.loads(response.data)
        assert data["error"] == "NotFoundError"
        assert "message" in data


class TestCreateTask:
    """Tests for POST /v1/tasks endpoint."""

    def test_create_task_with_valid_data(
        self, client, db_session, valid_task_data, api_headers
    ):
        # Act
        response = client.post(
            "/v1/tasks", data=json.dumps(valid_task_data), headers=api_headers
        )

        # Assert
        assert response.status_code == 201
        data = json.loads(response.data)
        assert data["id"] is not None
        assert data["title"] == valid_task_data["title"]
        assert data["status"] == TaskStatus.IN_PROGRESS.value
        assert data["createdAt"] is not None
        assert data["updatedAt"] is not None

    def test_create_then_get_round_trip(self, client, db_session, api_headers):
        # Arrange
        created = client.post(
            "/v1/tasks",
            data=json.dumps({"title": "A", "description": "B"}),
            headers=api_headers,
        )
        task_id = json.loads(created.data)["id"]

        # Act
        response = client.get(f"/v1/tasks/{task_id}")

        # Assert
        data = json.loads(response.data)
        assert (data["title"], data["description"], data["status"]) == ("A", "B", "pending")

    def test_create_task_ignores_client_supplied_id(
        self, client, db_session, minimal_task_data, api_headers
    ):
        # Arrange
        payload = {**minimal_task_data, "id": 4242}

        # Act
        response = client.post("/v1/tasks", data=json.dumps(payload), headers=api_headers)

        # Assert
        assert response.status_code == 201
        assert json.loads(response.data)["id"] != 4242


class TestUpdateTask:
    """Tests for PATCH /v1/tasks/<id> endpoint."""

    def test_update_task_fields(self, client, db_session, sample_task, api_headers):
        # Act
        response = client.patch(
            f"/v1/tasks/{sample_task.id}",
            data=json.dumps({"title": "Updated", "description": "New description"}),
            headers=api_headers,
        )

        # Assert
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data["title"] == "Updated"
        assert data["description"] == "New description"
        assert data["status"] == "pending"

    def test_status_only_patch_changes_status(
        self, client, db_session, sample_task, api_headers
    ):
        # Act
        response = client.patch(
            f"/v1/tasks/{sample_task.id}",
            data=json.dumps({"status": "completed"}),
            headers=api_headers,
        )

        # Assert
        assert response.status_code == 200
        assert json.loads(response.data)["status"] == "completed"

    def test_status_patch_twice_is_idempotent(
        self, client, db_session, sample_task, api_headers
    ):
        # Arrange
        url = f"/v1/tasks/{sample_task.id}"
        body = json.dumps({"status": "completed"})

        # Act
        first = client.patch(url, data=body, headers=api_headers)
        second = client.patch(url, data=body, headers=api_headers)

        # Assert
        assert first.status_code == second.status_code == 200
        first_data, second_data = json.loads(first.data), json.loads(second.data)
        assert first_data["status"] == second_data["status"] == "completed"
        assert first_data["title"] == second_data["title"]

    def test_update_nonexistent_task_returns_404(self, client, db_session, api_headers):
        # Act
        response = client.patch(
            "/v1/tasks/99999", data=json.dumps({"title": "Ghost"}), headers=api_headers
        )

        # Assert
        assert response.status_code == 404
        assert "message" in json.loads(response.data)


class TestDeleteTask:
    """Tests for DELETE /v1/tasks/<id> endpoint."""

    def test_delete_task_returns_confirmation(self, client, db_session, sample_task):
        # Act
        response = client.delete(f"/v1/tasks/{sample_task.id}")

        # Assert
        assert response.status_code == 200
        assert json.loads(response.data) == {"message": "Task deleted successfully"}

    def test_deleted_task_is_gone(self, client, db_session, sample_task):
        # Arrange
        task_id = sample_task.id
        client.delete(f"/v1/tasks/{task_id}")

        # Act
        response = client.get(f"/v1/tasks/{task_id}")

        # Assert
        assert response.status_code == 404

    def test_delete_nonexistent_task_returns_404(self, client, db_session):
        # Act
        response = client.delete("/v1/tasks/99999")

        # Assert
        assert response.status_code == 404
