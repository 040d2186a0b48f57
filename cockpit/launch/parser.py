"""Extract summary fields from HTML pages and parse GitHub repo references."""
import html as html_lib
import re

OWNER_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def _clean(fragment: str) -> str:
    """Strip nested tags, decode entities and collapse whitespace."""
    text = re.sub(r"<[^>]*>", " ", fragment)
    text = html_lib.unescape(text)
    return re.sub(r"\s+", " ", text).strip()


def extract_tag_content(html: str, tag: str) -> str:
    """Return the text of the first ``<tag>`` element, or "" if absent."""
    match = re.search(rf"<{tag}\b[^>]*>(.*?)</{tag}>", html, re.IGNORECASE | re.DOTALL)
    return _clean(match.group(1)) if match else ""


def extract_all_tag_content(html: str, tag: str) -> list[str]:
    """Return the text of every ``<tag>`` element, skipping empty ones."""
    matches = re.findall(rf"<{tag}\b[^>]*>(.*?)</{tag}>", html, re.IGNORECASE | re.DOTALL)
    return [text for text in (_clean(m) for m in matches) if text]


def extract_meta_content(html: str, name: str) -> str:
    """
    Return the content of ``<meta name="...">``.

    Handles both attribute orders:
        <meta name="description" content="...">
        <meta content="..." name="description">
    """
    pattern = (
        rf"<meta[^>]*name=[\"']{name}[\"'][^>]*content=[\"']([^\"']*)[\"'][^>]*>"
        rf"|<meta[^>]*content=[\"']([^\"']*)[\"'][^>]*name=[\"']{name}[\"'][^>]*>"
    )
    match = re.search(pattern, html, re.IGNORECASE)
    if not match:
        return ""
    return html_lib.unescape(match.group(1) or match.group(2) or "").strip()


def extract_text_content(html: str) -> str:
    """Return the visible text of a page with scripts, styles and SVG removed."""
    text = re.sub(r"<(script|style|svg)\b.*?</\1\s*>", " ", html, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<!--.*?-->", " ", text, flags=re.DOTALL)
    return _clean(text)


def parse_repo_reference(reference: str | None) -> tuple[str, str] | None:
    """
    Parse a GitHub repository reference into ``(owner, repo)``.

    Accepted formats:
        owner/repo
        github.com/owner/repo
        https://github.com/owner/repo(.git)
        git@github.com:owner/repo.git

    Returns None when the reference cannot be parsed.
    """
    if not reference or not reference.strip():
        return None

    ref = reference.strip()
    if "github.com" in ref:
        ref = ref.split("github.com", 1)[1].lstrip(":/")
    elif "://" in ref or ref.startswith("git@"):
        # A URL for some other host
        return None

    parts = [part for part in ref.split("/") if part]
    if len(parts) < 2:
        return None

    owner = parts[0]
    repo = parts[1].removesuffix(".git")
    if not OWNER_PATTERN.match(owner) or not REPO_PATTERN.match(repo):
        return None
    return owner, repo
