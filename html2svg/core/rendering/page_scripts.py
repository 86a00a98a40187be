"""
Page Scripts
============

Versioned scripts evaluated inside the rendered page. Each script is a
JavaScript function taking a single JSON-serializable argument; callers pass
parameters and never edit the source.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageScript:
    """An opaque in-page function with a name and version."""

    name: str
    version: int
    source: str

    @property
    def label(self) -> str:
        return f"{self.name}@v{self.version}"


# Hide scrollbar chrome, scroll to the bottom so lazy content loads, wait a
# frame, scroll back, wait the settle delay, then wait one more frame.
SETTLE_SCRIPT = PageScript(
    name="settle",
    version=1,
    source="""
async ({ settleDelay }) => {
    const css = `
        body::-webkit-scrollbar, body::-webkit-scrollbar-track, body::-webkit-scrollbar-thumb {
            display: none;
        }
    `
    const style = document.createElement('style')

    if (window.trustedTypes && trustedTypes.createPolicy) {
        const policy = trustedTypes.createPolicy('html2svg/scrollbar-css', { createHTML: x => x })

        style.innerHTML = policy.createHTML(css)
    } else {
        style.textContent = css
    }

    ;(document.head || document.documentElement).appendChild(style)

    const nextFrame = () => new Promise(resolve => requestAnimationFrame(() => resolve()))

    scrollTo({ top: document.body ? document.body.scrollHeight : 0 })
    await nextFrame()
    scrollTo({ top: 0 })
    await new Promise(resolve => setTimeout(resolve, settleDelay))
    await nextFrame()
}
""",
)


# Returns the document as a byte array when the engine exposes a native
# capture hook, an SVG string for vector mode otherwise, and null when the
# caller has to fall back to the engine's print primitive.
CAPTURE_SCRIPT = PageScript(
    name="capture",
    version=1,
    source="""
async ({ mode, title }) => {
    if (typeof window.getPageContentsAsSVG === 'function') {
        const result = await window.getPageContentsAsSVG(mode, title)

        return Array.from(new Uint8Array(result))
    }

    if (mode !== 0) {
        return null
    }

    const root = document.documentElement
    const width = Math.max(root.scrollWidth, window.innerWidth)
    const height = Math.max(root.scrollHeight, window.innerHeight)
    const escape = text => text
        .replace(/&/g, '&amp;')
        .replace(/</g, '&lt;')
        .replace(/>/g, '&gt;')
    const body = new XMLSerializer().serializeToString(root)

    return `<svg xmlns="http://www.w3.org/2000/svg" width="${width}" height="${height}" `
        + `viewBox="0 0 ${width} ${height}"><title>${escape(title)}</title>`
        + `<foreignObject x="0" y="0" width="${width}" height="${height}">${body}</foreignObject></svg>`
}
""",
)
