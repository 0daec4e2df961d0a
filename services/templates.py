"""Email subjects and HTML bodies. Every user-supplied value is escaped."""

from datetime import datetime, timezone
from html import escape

from models import AlphaSubmission, ReferralSubmission, SignupType, WaitlistSubmission

PRODUCT = "Neural Commander"
SITE_URL = "https://neuralcommander.ai"
REPO_URL = "https://github.com/angelsintheai/neural-commander"
TELEGRAM_URL = "https://t.me/neuralcommander"

DISCOVERY_LABELS = {
    "twitter": "Twitter/X",
    "hackernews": "Hacker News",
    "reddit": "Reddit",
    "referral": "Friend referral",
    "google": "Google search",
    "ai-communities": "AI coding communities",
    "other": "Other",
}

_STYLE = """\
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; }
.container { max-width: 600px; margin: 0 auto; padding: 20px; }
.header { background: linear-gradient(135deg, %s, %s); color: white; padding: 30px; text-align: center; border-radius: 12px 12px 0 0; }
.content { background: #f8f9fa; padding: 30px; border-radius: 0 0 12px 12px; }
.button { display: inline-block; background: #4a9eff; color: white; padding: 12px 24px; text-decoration: none; border-radius: 8px; margin: 20px 0; }
.box { padding: 15px; border-radius: 8px; margin: 20px 0; }
.footer { text-align: center; color: #666; font-size: 12px; margin-top: 20px; }"""


def discovery_label(source: str) -> str:
    return DISCOVERY_LABELS.get(source, source)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _page(title: str, content: str, colors: tuple[str, str] = ("#4a9eff", "#10b981")) -> str:
    year = datetime.now(timezone.utc).year
    return f"""\
<!DOCTYPE html>
<html>
<head>
<style>
{_STYLE % colors}
</style>
</head>
<body>
  <div class="container">
    <div class="header"><h1 style="margin: 0;">{title}</h1></div>
    <div class="content">
{content}
    </div>
    <div class="footer">
      <p>{PRODUCT} &bull; Liberation Technology for Developers</p>
      <p>&copy; {year} {PRODUCT} Pty Ltd</p>
    </div>
  </div>
</body>
</html>"""


def _fields(rows: list[tuple[str, str]]) -> str:
    return "\n".join(f"<p><strong>{label}:</strong> {value}</p>" for label, value in rows)


# ── Waitlist ─────────────────────────────────────────────────────────────────
def waitlist_subject(sub: WaitlistSubmission) -> str:
    if sub.signup_type is SignupType.FOUNDATION100:
        return "🎉 Welcome to Foundation 100!"
    return f"🚀 You're on the {PRODUCT} Waitlist!"


def waitlist_body(sub: WaitlistSubmission) -> str:
    name = escape(sub.name or "there")
    if sub.signup_type is SignupType.FOUNDATION100:
        return _page("🎉 Welcome, Founding Member!", f"""\
      <p>Hey {name},</p>
      <p>You're officially a {PRODUCT} Founding Member! Welcome to the Foundation 100.</p>
      <h3>Your Lifetime Benefits:</h3>
      <ul>
        <li>Lifetime Pro license (never pay again)</li>
        <li>All future Pro features included</li>
        <li>Founding member badge</li>
        <li>Priority support forever</li>
        <li>Vote on product roadmap</li>
      </ul>
      <p>We'll reach out before the beta launch with payment details and your exclusive access link.</p>
      <p>&mdash; Bradley Hughes, Founder</p>""")

    return _page("🚀 You're on the List!", f"""\
      <p>Hey {name},</p>
      <p>Welcome to the {PRODUCT} waitlist! You're now in line for early access to the beta.</p>
      <h3>What's Next?</h3>
      <ul>
        <li>We'll email you when beta invites start going out</li>
        <li>Invites go out in order of signup</li>
        <li>Your Community tier will be free forever</li>
      </ul>
      <h3>Want Lifetime Pro?</h3>
      <p>Foundation 100 members get lifetime Pro access for a one-time payment. Only 100 spots available.</p>
      <a href="{SITE_URL}/foundation-100" class="button">Learn About Foundation 100</a>
      <p>&mdash; Bradley &amp; the {PRODUCT} Team</p>""", ("#4a9eff", "#3d8ce6"))


def waitlist_admin_subject(sub: WaitlistSubmission) -> str:
    if sub.signup_type is SignupType.FOUNDATION100:
        return f"💰 Foundation 100 Signup: {sub.email}"
    return f"📋 New Waitlist Signup: {sub.email}"


def waitlist_admin_body(sub: WaitlistSubmission) -> str:
    heading = "Foundation 100" if sub.signup_type is SignupType.FOUNDATION100 else "Waitlist"
    return f"<h2>{heading} Signup</h2>\n" + _fields([
        ("Email", escape(sub.email)),
        ("Name", escape(sub.name or "Not provided")),
        ("Type", sub.signup_type.value),
        ("Time", _now()),
    ])


# ── Referral ─────────────────────────────────────────────────────────────────
def referral_invite_subject(sub: ReferralSubmission) -> str:
    return f"{sub.referrer_name} invited you to try {PRODUCT}"


def referral_invite_body(sub: ReferralSubmission, code: str) -> str:
    referrer = escape(sub.referrer_name)
    return _page("You've Been Invited!", f"""\
      <p>Hey {escape(sub.friend_name)},</p>
      <p>Your friend <strong>{referrer}</strong> is using {PRODUCT}, the AI-powered tool that keeps your
      project healthy and your development context persistent across any IDE.</p>
      <div class="box" style="background: #e0f2fe; border: 2px dashed #4a9eff; text-align: center;">
        <p style="margin: 0; font-size: 14px; color: #666;">Your referral code</p>
        <p style="margin: 5px 0; font-size: 24px; font-weight: bold; font-family: monospace;">{code}</p>
        <p style="margin: 0; font-size: 12px; color: #666;">Use this when you sign up to credit {referrer}</p>
      </div>
      <p style="text-align: center;"><a href="{SITE_URL}/waitlist?ref={code}" class="button">Join the Waitlist Free</a></p>
      <p>The Community Edition is <strong>free forever</strong>.</p>
      <p>&mdash; The {PRODUCT} Team</p>""")


def referral_confirmation_subject(sub: ReferralSubmission) -> str:
    return f"Your referral to {sub.friend_name} has been sent!"


def referral_confirmation_body(sub: ReferralSubmission) -> str:
    friend = escape(sub.friend_name)
    if sub.counterparty_address:
        reward = f"""\
      <div class="box" style="background: #fef3c7; border-left: 4px solid #f59e0b;">
        <h3 style="margin-top: 0;">GIVEKUDOS Token Reward</h3>
        <p>When {friend} joins the <strong>Community Edition</strong>, we'll send <strong>10,000 GIVEKUDOS</strong>
        tokens to your Counterparty address:</p>
        <p style="font-family: monospace; word-break: break-all;">{escape(sub.counterparty_address)}</p>
      </div>"""
    else:
        reward = """\
      <p style="color: #666; font-size: 14px;"><em>Tip: Add your Counterparty address next time to earn
      10,000 GIVEKUDOS tokens when friends join!</em></p>"""

    return _page("Invite Sent!", f"""\
      <p>Hey {escape(sub.referrer_name)},</p>
      <p>Great news! We've sent your invite to <strong>{friend}</strong>. Here's what happens next:</p>
      <div class="box" style="background: #ecfdf5; border-left: 4px solid #10b981;">
        <h3 style="margin-top: 0;">Your Potential Rewards</h3>
        <ul>
          <li><strong>1 month free</strong> when {friend} starts a trial</li>
          <li><strong>+1 month free</strong> if they upgrade to Pro monthly</li>
          <li><strong>+2 months free</strong> if they go Pro annual</li>
        </ul>
      </div>
{reward}
      <p>Thanks for spreading the word!</p>
      <p>&mdash; The {PRODUCT} Team</p>""", ("#10b981", "#4a9eff"))


def referral_admin_subject(sub: ReferralSubmission) -> str:
    return f"🔗 New Referral: {sub.referrer_name} → {sub.friend_name}"


def referral_admin_body(sub: ReferralSubmission, code: str) -> str:
    body = "<h2>New Referral Submitted</h2>\n<h3>Referrer</h3>\n" + _fields([
        ("Name", escape(sub.referrer_name)),
        ("Email", escape(sub.referrer_email)),
        ("Counterparty Address", escape(sub.counterparty_address or "Not provided")),
    ])
    body += "\n<h3>Referred Friend</h3>\n" + _fields([
        ("Name", escape(sub.friend_name)),
        ("Email", escape(sub.friend_email)),
    ])
    body += "\n<h3>Meta</h3>\n" + _fields([("Referral Code", code), ("Time", _now())])
    if sub.counterparty_address:
        body += "\n<p><strong>GIVEKUDOS eligible if friend joins Community</strong></p>"
    return body


# ── Alpha ────────────────────────────────────────────────────────────────────
def alpha_subject(sub: AlphaSubmission) -> str:
    return f"🧪 Alpha Access Request Received - {PRODUCT}"


def alpha_body(sub: AlphaSubmission) -> str:
    github = escape(sub.github)
    return _page("🧪 Request Received!", f"""\
      <p>Hey {escape(sub.name)},</p>
      <p>Thanks for requesting alpha access to {PRODUCT}! We've received your request and will review it shortly.</p>
      <h3>What happens next?</h3>
      <ol>
        <li><strong>We review your request</strong> within 24 hours.</li>
        <li><strong>Check your GitHub notifications</strong> for a collaborator invite to
          <a href="{REPO_URL}">the repository</a> at @{github}.</li>
        <li><strong>Download and start testing</strong> from the Releases page once you accept.</li>
      </ol>
      <p>Questions? Reply to this email or join our <a href="{TELEGRAM_URL}">Telegram group</a>.</p>
      <p>&mdash; Bradley &amp; the {PRODUCT} Team</p>""", ("#10b981", "#059669"))


def alpha_admin_subject(sub: AlphaSubmission) -> str:
    return f"🧪 Alpha Request: {sub.github} ({sub.name})"


def alpha_admin_body(sub: AlphaSubmission) -> str:
    email = escape(sub.email)
    github = escape(sub.github)
    return "<h2>New Alpha Access Request</h2>\n" + _fields([
        ("Name", escape(sub.name)),
        ("Email", f'<a href="mailto:{email}">{email}</a>'),
        ("GitHub Username", f'<a href="https://github.com/{github}">@{github}</a>'),
        ("Discovery Source", escape(discovery_label(sub.discovery))),
        ("Why They Want to Test", escape(sub.motivation)),
        ("Received", _now()),
    ]) + f'\n<p><a href="{REPO_URL}/settings/access">Add Collaborator on GitHub</a></p>'
