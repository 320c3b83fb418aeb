from dataclasses import dataclass, field

from mealime_pipeline.domain.errors import InvalidCredentials


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.email:
            raise InvalidCredentials("Invalid email")
        if not self.password:
            raise InvalidCredentials("Invalid password")
