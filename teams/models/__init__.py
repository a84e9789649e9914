from teams.models.team_member import TeamMember
from teams.models.teams import Team

# Member lives in its own package; import it so every mapper is registered together
from members.models.member import Member  # noqa: F401

__all__ = ["Team", "TeamMember"]
