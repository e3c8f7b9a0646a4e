"""Static reference lists used by the list-based checks.

Defaults ship with the package and are loaded once at import. ``ReferenceData``
bundles them (plus any config.yml extensions) into an injectable object so
tests and callers can supply their own lists.
"""

from dataclasses import dataclass, field
from pathlib import Path

from mailvet.config import ReferenceDataConfig


def _load_disposable_domains() -> frozenset[str]:
    """Load disposable domains from file into a frozenset for O(1) lookup."""
    domains_file = Path(__file__).parent / "disposable_domains.txt"
    if not domains_file.exists():
        return frozenset()

    domains = set()
    with open(domains_file) as f:
        for line in f:
            line = line.strip().lower()
            # Skip comments and empty lines
            if line and not line.startswith("#"):
                domains.add(line)
    return frozenset(domains)


# Load disposable domains once at module import
DISPOSABLE_DOMAINS = _load_disposable_domains()

ROLE_PREFIXES = frozenset(
    {
        "abuse",
        "accounts",
        "admin",
        "administrator",
        "billing",
        "careers",
        "contact",
        "dev",
        "devnull",
        "help",
        "hello",
        "hostmaster",
        "hr",
        "info",
        "jobs",
        "legal",
        "mail",
        "mailer-daemon",
        "marketing",
        "media",
        "news",
        "newsletter",
        "no-reply",
        "noreply",
        "office",
        "postmaster",
        "press",
        "privacy",
        "root",
        "sales",
        "security",
        "service",
        "support",
        "team",
        "webmaster",
    }
)

FREE_PROVIDERS: dict[str, str] = {
    "aol.com": "AOL",
    "fastmail.com": "Fastmail",
    "gmail.com": "Gmail",
    "googlemail.com": "Gmail",
    "gmx.com": "GMX",
    "gmx.de": "GMX",
    "hey.com": "HEY",
    "hotmail.com": "Outlook",
    "hotmail.co.uk": "Outlook",
    "icloud.com": "iCloud",
    "live.com": "Outlook",
    "mail.com": "Mail.com",
    "mail.ru": "Mail.ru",
    "me.com": "iCloud",
    "msn.com": "Outlook",
    "outlook.com": "Outlook",
    "proton.me": "Proton Mail",
    "protonmail.com": "Proton Mail",
    "tutanota.com": "Tutanota",
    "web.de": "WEB.DE",
    "yahoo.co.uk": "Yahoo",
    "yahoo.com": "Yahoo",
    "yandex.com": "Yandex",
    "yandex.ru": "Yandex",
    "zoho.com": "Zoho",
}

# Exact misspelling -> canonical domain
TYPO_DOMAINS: dict[str, str] = {
    "gamil.com": "gmail.com",
    "gmai.com": "gmail.com",
    "gmail.co": "gmail.com",
    "gmail.con": "gmail.com",
    "gmal.com": "gmail.com",
    "gmaill.com": "gmail.com",
    "gmial.com": "gmail.com",
    "gmil.com": "gmail.com",
    "gnail.com": "gmail.com",
    "hotamil.com": "hotmail.com",
    "hotmai.com": "hotmail.com",
    "hotmail.co": "hotmail.com",
    "hotmail.con": "hotmail.com",
    "hotmal.com": "hotmail.com",
    "hotmial.com": "hotmail.com",
    "htomail.com": "hotmail.com",
    "icloud.co": "icloud.com",
    "iclod.com": "icloud.com",
    "outlok.com": "outlook.com",
    "outlook.co": "outlook.com",
    "outlook.con": "outlook.com",
    "outloo.com": "outlook.com",
    "yaho.com": "yahoo.com",
    "yahoo.co": "yahoo.com",
    "yahoo.con": "yahoo.com",
    "yahooo.com": "yahoo.com",
    "yhaoo.com": "yahoo.com",
}

# Domain-based DNSBLs, queried as <domain>.<host>
BLACKLIST_HOSTS: tuple[str, ...] = (
    "dbl.spamhaus.org",
    "multi.surbl.org",
    "multi.uribl.com",
)

# Domains known to accept mail for any local part
CATCH_ALL_DOMAINS = frozenset(
    {
        "33mail.com",
        "anonaddy.me",
        "guerrillamail.com",
        "mailinator.com",
        "yopmail.com",
    }
)


@dataclass(frozen=True)
class ReferenceData:
    """Lookup tables for the list-based checks. All keys are lowercase."""

    disposable_domains: frozenset[str] = DISPOSABLE_DOMAINS
    role_prefixes: frozenset[str] = ROLE_PREFIXES
    free_providers: dict[str, str] = field(default_factory=lambda: dict(FREE_PROVIDERS))
    typo_domains: dict[str, str] = field(default_factory=lambda: dict(TYPO_DOMAINS))
    blacklist_hosts: tuple[str, ...] = BLACKLIST_HOSTS
    catch_all_domains: frozenset[str] = CATCH_ALL_DOMAINS

    @classmethod
    def from_config(cls, config: ReferenceDataConfig) -> "ReferenceData":
        """Defaults extended with the lists from config.yml."""
        hosts = list(BLACKLIST_HOSTS)
        hosts.extend(h.lower() for h in config.blacklist_hosts if h.lower() not in hosts)
        return cls(
            disposable_domains=DISPOSABLE_DOMAINS | {d.lower() for d in config.disposable_domains},
            role_prefixes=ROLE_PREFIXES | {r.lower() for r in config.role_prefixes},
            free_providers={
                **FREE_PROVIDERS,
                **{k.lower(): v for k, v in config.free_providers.items()},
            },
            typo_domains={
                **TYPO_DOMAINS,
                **{k.lower(): v.lower() for k, v in config.typo_domains.items()},
            },
            blacklist_hosts=tuple(hosts),
            catch_all_domains=CATCH_ALL_DOMAINS | {d.lower() for d in config.catch_all_domains},
        )
