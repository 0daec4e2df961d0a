from dataclasses import dataclass, field
from enum import Enum


class SubmissionKind(str, Enum):
    WAITLIST = "waitlist"
    REFERRAL = "referral"
    ALPHA = "alpha"


class SignupType(str, Enum):
    WAITLIST = "waitlist"
    FOUNDATION100 = "foundation100"

    @classmethod
    def parse(cls, value: str | None) -> "SignupType":
        return cls.FOUNDATION100 if value == cls.FOUNDATION100.value else cls.WAITLIST


class Priority(str, Enum):
    CRITICAL = "critical"  # failure aborts the request
    BEST_EFFORT = "best_effort"  # failure is logged and ignored


@dataclass(frozen=True)
class WaitlistSubmission:
    email: str
    name: str | None
    signup_type: SignupType = SignupType.WAITLIST

    kind = SubmissionKind.WAITLIST


@dataclass(frozen=True)
class ReferralSubmission:
    referrer_name: str
    referrer_email: str
    friend_name: str
    friend_email: str
    counterparty_address: str | None = None

    kind = SubmissionKind.REFERRAL


@dataclass(frozen=True)
class AlphaSubmission:
    name: str
    email: str
    github: str
    discovery: str
    motivation: str
    bot_token: str | None = None

    kind = SubmissionKind.ALPHA


Submission = WaitlistSubmission | ReferralSubmission | AlphaSubmission


@dataclass(frozen=True)
class NotificationJob:
    label: str
    recipient: str
    sender_email: str
    sender_name: str
    subject: str
    html: str
    priority: Priority = Priority.BEST_EFFORT

    @property
    def critical(self) -> bool:
        return self.priority is Priority.CRITICAL


@dataclass(frozen=True)
class ContactRecord:
    email: str
    first_name: str
    custom_fields: dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> dict:
        return {
            "email": self.email,
            "first_name": self.first_name,
            "custom_fields": dict(self.custom_fields),
        }


@dataclass
class DispatchPlan:
    jobs: list[NotificationJob] = field(default_factory=list)
    contacts: list[ContactRecord] = field(default_factory=list)
