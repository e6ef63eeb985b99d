from dataclasses import dataclass


@dataclass
class IssueResult:
    ok: bool
    iid: int | None = None
    web_url: str | None = None
    status_code: int | None = None
    error: str | None = None

    @property
    def message(self) -> str:
        if self.ok:
            return f"✅ Issue #{self.iid} created successfully: {self.web_url}"
        if self.status_code is not None:
            return f"❌ GitLab create issue failed: {self.status_code} {self.error or ''}"
        return f"❌ {self.error}"
