import logging

import httpx

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class IdentityClient:
    """
    Thin client for the Supabase Auth (GoTrue) REST API.
    The provider is the only session store: nothing is cached between calls.
    """

    def __init__(self, base_url: str, api_key: str, transport: httpx.AsyncBaseTransport | None = None):
        self.auth_url = f"{base_url.rstrip('/')}/auth/v1"
        self.api_key = api_key
        self._transport = transport

    def _headers(self, access_token: str | None = None) -> dict:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
            "Content-Type": "application/json",
        }

    async def _request(self, method: str, path: str, access_token: str | None = None, **kwargs):
        url = f"{self.auth_url}{path}"
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.request(method, url, headers=self._headers(access_token), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Network error calling identity provider: {e}")
            raise IdentityError("Identity provider unavailable") from e

        if resp.status_code >= 400:
            raise IdentityError(self._error_message(resp), resp.status_code)

        if not resp.content:
            return {}
        return resp.json()

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text or f"Identity provider error ({resp.status_code})"

        if isinstance(body, dict):
            for key in ("msg", "error_description", "message", "error"):
                if body.get(key):
                    return str(body[key])
        return f"Identity provider error ({resp.status_code})"

    @staticmethod
    def _user_and_session(data: dict) -> dict:
        # Sign-up without auto-confirm returns a bare user instead of a session
        if "access_token" in data:
            return {"user": data.get("user"), "session": data}
        return {"user": data, "session": None}

    async def sign_up(self, email: str, password: str, name: str) -> dict:
        data = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": {"name": name}},
        )
        logger.info(f"User registered: {email}")
        return self._user_and_session(data)

    async def sign_in(self, email: str, password: str) -> dict:
        data = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return self._user_and_session(data)

    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/logout", access_token=access_token)

    async def get_user(self, access_token: str) -> dict:
        user = await self._request("GET", "/user", access_token=access_token)
        if not user:
            raise IdentityError("User not found", 404)
        return user
