"""Responsive delivery URLs for images hosted on Cloudinary."""

TRANSFORM_MARKER = "/f_auto,q_auto"


def optimized_image_url(url: str | None, width: int = 500) -> str:
    """Inject auto-format, auto-quality and width into a Cloudinary upload URL.

    URLs that are not Cloudinary uploads, or already carry the transform,
    come back unchanged.
    """
    if not url:
        return ""
    if "cloudinary.com" in url and "/upload/" in url and TRANSFORM_MARKER not in url:
        return url.replace("/upload/", f"/upload/f_auto,q_auto,w_{width}/", 1)
    return url
