from __future__ import annotations

from ..api.router import ActionRouter, current_actor, params, text_param
from ..api.serializers import user_to_json
from ..container import Container


def register(api: ActionRouter, container: Container) -> None:
    auth = container.auth_service
    users = container.user_service

    @api.action("signup", methods=("POST",), public=True)
    def signup():
        data = params()
        result = auth.signup(
            name=text_param(data, "name"),
            email=text_param(data, "email"),
            password=text_param(data, "password"),
        )
        return user_to_json(result.user, api_token=result.api_token)

    @api.action("login", methods=("POST",), public=True)
    def login():
        data = params()
        result = auth.login(text_param(data, "email"), text_param(data, "password"))
        return user_to_json(result.user, api_token=result.api_token)

    @api.action("logout", methods=("POST",))
    def logout():
        auth.logout(current_actor())
        return {"ok": True}

    @api.action("me")
    def me():
        return user_to_json(current_actor())

    @api.action("user_get")
    def user_get():
        return user_to_json(users.get_user(current_actor(), text_param(params(), "id")))

    @api.action("users")
    def list_users():
        rows = users.list_users(current_actor(), workspace_id=text_param(params(), "workspaceId"))
        return [user_to_json(u) for u in rows]

    @api.action("users_create", methods=("POST",))
    def users_create():
        data = params()
        created = users.create_user(
            current_actor(),
            name=text_param(data, "name"),
            email=text_param(data, "email"),
            password=text_param(data, "password"),
        )
        return user_to_json(created)

    @api.action("users_delete", methods=("POST",))
    def users_delete():
        data = params()
        users.delete_user(current_actor(), text_param(data, "id"), workspace_id=text_param(data, "workspaceId"))
        return {"ok": True}

    @api.action("users_promote", methods=("POST",))
    def users_promote():
        data = params()
        users.change_role(
            current_actor(),
            text_param(data, "id"),
            text_param(data, "newRole"),
            workspace_id=text_param(data, "workspaceId"),
        )
        return {"ok": True}
