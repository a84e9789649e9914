class NotFound(Exception):
    def __init__(self, name: str, message: str | None = None):
        self.name = name
        self.message = message or f"Oops! {name} not found."
        super().__init__(self.message)


class TeamNotFound(NotFound):
    def __init__(self):
        super().__init__("Team", "Team does not exist")


class MemberNotFound(NotFound):
    def __init__(self, member_id: int):
        self.member_id = member_id
        super().__init__("Member", f"Member with id {member_id} not found")


class Conflict(Exception):
    def __init__(self, name: str | None = None):
        self.name = name
        super().__init__(name)


class ConstraintViolation(Conflict):
    pass


class InvalidPaging(ValueError):
    """Bad page index, page size or sort order."""
