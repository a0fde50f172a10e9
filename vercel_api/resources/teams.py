"""Teams and team membership."""

from __future__ import annotations

from vercel_api.resources.base import Resource, items_of
from vercel_api.schemas import (
    InviteTeamMemberRequest,
    Team,
    TeamInvitation,
    TeamMember,
    TeamMemberPage,
    TeamPage,
    TeamRole,
    UpdateMemberRoleRequest,
)


class TeamsAPI(Resource):
    model = Team
    page_model = TeamPage
    paths = {
        "list": "/v2/teams",
        "get": "/v2/teams/{id}",
        "members": "/v2/teams/{id}/members",
        "invite": "/v1/teams/{id}/members",
        "member": "/v1/teams/{id}/members/{user_id}",
    }

    def list(self):
        """All teams the token's user belongs to, as a plain list."""
        return self._http.execute(
            "GET", self._op_path("list"), response_model=TeamPage, unwrap=items_of
        )

    def get(self, id: str):
        return self._retrieve(id=id)

    def members(self, team_id: str):
        return self._http.execute(
            "GET",
            self._op_path("members", id=team_id),
            response_model=TeamMemberPage,
            unwrap=items_of,
        )

    def invite_member(self, team_id: str, request: InviteTeamMemberRequest):
        return self._http.execute(
            "POST",
            self._op_path("invite", id=team_id),
            body=request,
            response_model=TeamInvitation,
        )

    def remove_member(self, team_id: str, user_id: str):
        return self._http.execute_empty(
            "DELETE", self._op_path("member", id=team_id, user_id=user_id)
        )

    def update_member_role(self, team_id: str, user_id: str, role: TeamRole):
        return self._http.execute(
            "PATCH",
            self._op_path("member", id=team_id, user_id=user_id),
            body=UpdateMemberRoleRequest(role=role),
            response_model=TeamMember,
        )
