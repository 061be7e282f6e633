"""HTTPX-backed client for the Potluck API."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from app.exceptions import (
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from client.session import ClientSession
from domain.schemas.ingredient_schemas import IngredientResponse

logger = logging.getLogger("potluck.client")

_ERRORS_BY_STATUS = {
    401: UnauthorizedError,
    404: NotFoundError,
    422: ServiceValidationError,
}


def raise_for_error(response: httpx.Response) -> None:
    """Translate an error envelope into the matching service exception."""
    if response.is_success:
        return
    error_cls = _ERRORS_BY_STATUS.get(response.status_code)
    if error_cls is None:
        response.raise_for_status()
        return
    try:
        error = response.json().get("error") or {}
    except ValueError:
        error = {}
    raise error_cls(error.get("message"), details=error.get("details"), code=error.get("code"))


@dataclass
class PotluckClient:
    """
    Synchronous API client.

    Privileged calls carry the session's bearer token. A 401 on a privileged
    call triggers exactly one re-login with the session's credentials and a
    single retry; without credentials, or if the retry is rejected too,
    ``UnauthorizedError`` propagates.
    """

    session: ClientSession
    http_client: httpx.Client

    @classmethod
    def create(cls, session: ClientSession) -> "PotluckClient":
        """Create a client with a managed httpx session."""
        return cls(session=session, http_client=httpx.Client(timeout=session.timeout))

    def close(self) -> None:
        self.http_client.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _send(self, method: str, path: str, privileged: bool, **kwargs) -> httpx.Response:
        headers = self.session.auth_headers() if privileged else {}
        return self.http_client.request(
            method, f"{self.session.api_base}{path}", headers=headers, **kwargs
        )

    def _request(self, method: str, path: str, privileged: bool = False, **kwargs) -> Any:
        if privileged and not self.session.token and self.session.can_login:
            self.login()
        response = self._send(method, path, privileged, **kwargs)
        if response.status_code == 401 and privileged and self.session.can_login:
            logger.info("Token rejected for %s %s; re-authenticating once", method, path)
            self.session.clear_token()
            self.login()
            response = self._send(method, path, privileged, **kwargs)
        raise_for_error(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Organizer session
    # ------------------------------------------------------------------

    def login(self) -> str:
        if not self.session.can_login:
            raise UnauthorizedError("No organizer credentials configured")
        response = self._send(
            "POST",
            "/organizer_session",
            privileged=False,
            json={"username": self.session.username, "password": self.session.password},
        )
        raise_for_error(response)
        self.session.token = response.json()["token"]
        return self.session.token

    def logout(self) -> None:
        if self.session.token:
            self._request("DELETE", "/organizer_session", privileged=True)
        self.session.clear_token()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def search_ingredients(
        self, query: str, mode: Optional[str] = None
    ) -> List[IngredientResponse]:
        params = {"q": query}
        if mode:
            params["mode"] = mode
        data = self._request("GET", "/ingredients", params=params)
        return [IngredientResponse.model_validate(item) for item in data]

    def all_ingredients(self) -> List[IngredientResponse]:
        data = self._request("GET", "/ingredients/all")
        return [IngredientResponse.model_validate(item) for item in data]

    def get_ingredient(self, ingredient_id: int) -> IngredientResponse:
        return IngredientResponse.model_validate(
            self._request("GET", f"/ingredients/{ingredient_id}")
        )

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    def create_submission(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/submissions", json=payload)

    def lookup_submission(self, phone: str) -> Dict[str, Any]:
        return self._request("GET", "/submissions/lookup", params={"phone": phone})

    def list_submissions(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/submissions", privileged=True)

    def get_submission(self, submission_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/submissions/{submission_id}", privileged=True)

    def update_submission(self, submission_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/submissions/{submission_id}", privileged=True, json=payload
        )

    def delete_submission(self, submission_id: int) -> None:
        self._request("DELETE", f"/submissions/{submission_id}", privileged=True)

    def add_submission_ingredient(
        self, submission_id: int, ingredient_id: int, quantity: Optional[int] = None
    ) -> Dict[str, Any]:
        body = {"ingredient_id": ingredient_id}
        if quantity is not None:
            body["quantity"] = quantity
        return self._request(
            "POST", f"/submissions/{submission_id}/ingredients", privileged=True, json=body
        )

    def update_submission_ingredient(
        self, submission_id: int, ingredient_id: int, quantity: int
    ) -> Dict[str, Any]:
        return self._request(
            "PATCH",
            f"/submissions/{submission_id}/ingredients/{ingredient_id}",
            privileged=True,
            json={"quantity": quantity},
        )

    # ------------------------------------------------------------------
    # Grocery list
    # ------------------------------------------------------------------

    def grocery_list(self) -> Dict[str, Any]:
        return self._request("GET", "/grocery_list")

    def update_grocery_item(
        self,
        ingredient_id: int,
        checked: Optional[bool] = None,
        quantity: Optional[int] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if checked is not None:
            body["checked"] = checked
        if quantity is not None:
            body["quantity"] = quantity
        return self._request(
            "PATCH", f"/grocery_list/{ingredient_id}", privileged=True, json=body
        )

    def add_grocery_item(self, ingredient_id: int, quantity: int = 1) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/grocery_list/items",
            privileged=True,
            json={"ingredient_id": ingredient_id, "quantity": quantity},
        )

    # ------------------------------------------------------------------
    # Kitchen resources and notifications
    # ------------------------------------------------------------------

    def kitchen_resources(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/kitchen_resources")

    def create_kitchen_resource(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/kitchen_resources", privileged=True, json=payload)

    def update_kitchen_resource(self, resource_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "PATCH", f"/kitchen_resources/{resource_id}", privileged=True, json=payload
        )

    def delete_kitchen_resource(self, resource_id: int) -> None:
        self._request("DELETE", f"/kitchen_resources/{resource_id}", privileged=True)

    def notifications(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/notifications", privileged=True)

    def mark_notifications_read(self) -> Dict[str, Any]:
        return self._request("PATCH", "/notifications/mark_all_read", privileged=True)
