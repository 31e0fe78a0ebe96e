from __future__ import annotations

from typing import Any

from result import Result

from awstui.models.records import CallerIdentity
from awstui.repo.base import call


class IdentityRepo:
    def __init__(self, sts: Any, iam: Any) -> None:
        self._sts = sts
        self._iam = iam

    def caller_identity(self) -> Result[CallerIdentity, str]:
        def fetch() -> CallerIdentity:
            response = self._sts.get_caller_identity()
            return CallerIdentity(
                account=response.get("Account", ""),
                arn=response.get("Arn", ""),
                user_id=response.get("UserId", ""),
            )

        return call("GetCallerIdentity", fetch)

    def account_aliases(self) -> Result[list[str], str]:
        return call("ListAccountAliases", lambda: list(self._iam.list_account_aliases().get("AccountAliases", [])))
