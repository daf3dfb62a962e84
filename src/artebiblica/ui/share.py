"""Pre-filled share links for a generated illustration.

Three destinations are supported: Twitter/X and Facebook (link based) and
WhatsApp (messaging deep link).  Every link carries the share text and the
URL of the page; the image itself is not uploaded anywhere.
"""

from dataclasses import asdict, dataclass
from urllib.parse import quote

# Characters JavaScript's encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class ShareLinks:
    twitter: str
    facebook: str
    whatsapp: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def encode_component(value: str) -> str:
    """Percent-encode ``value`` the way ``encodeURIComponent`` does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_share_text(prompt: str) -> str:
    """Message posted alongside the link."""
    return (
        f'Veja a arte bíblica que criei sobre "{prompt.strip()}" '
        "com este incrível gerador de imagens!"
    )


def build_share_links(prompt: str, page_url: str) -> ShareLinks:
    """Build the three share URLs for ``prompt`` pointing at ``page_url``."""
    text = encode_component(build_share_text(prompt))
    url = encode_component(page_url)
    return ShareLinks(
        twitter=f"https://twitter.com/intent/tweet?text={text}&url={url}",
        facebook=f"https://www.facebook.com/sharer/sharer.php?u={url}&quote={text}",
        whatsapp="https://api.whatsapp.com/send?text="
        + encode_component(f"{build_share_text(prompt)} {page_url}"),
    )
