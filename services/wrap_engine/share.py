from .models import ResultPayload, SharePayload

SHARE_TITLE = "My Student Kickoff Wrap"

def build_share_payload(payload: ResultPayload, url: str) -> SharePayload:
    """Builds the title/text/url triple handed to whatever share target is available."""
    return SharePayload(
        title=SHARE_TITLE,
        text=f"Just got my semester forecast! {payload.stress_level}% stress incoming 😅",
        url=url,
    )
