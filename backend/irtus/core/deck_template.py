"""
Deterministic HTML renderer for generated pitch decks.

Takes a ``GeneratedDeck`` and produces a self-contained HTML page with:
- One numbered card per slide ("Slide Concept")
- The slide's strategic insight under an "Irtus Advisory Insight" label
- A closing "Strategic Advisory Summary" panel

Missing slide fields render as empty; a missing title falls back to "Slide".
"""

from __future__ import annotations

import html as html_mod

from irtus.schemas.deck_content import GeneratedDeck, Slide


def _e(text: str | None) -> str:
    """HTML-escape helper."""
    return html_mod.escape(text or "")


def _render_slide(slide: Slide, index: int) -> str:
    points = "\n".join(f"<li>{_e(p)}</li>" for p in slide.bullet_points)
    return f"""
    <article class="slide" data-slide="{index}">
      <header class="slide-header">
        <span class="slide-number">{index + 1:02d}</span>
        <span class="slide-badge">Slide Concept</span>
      </header>
      <h3 class="slide-title">{_e(slide.title or "Slide")}</h3>
      <p class="slide-subtitle">{_e(slide.subtitle)}</p>
      <ul class="slide-points">{points}</ul>
      <footer class="slide-insight">
        <p class="insight-label">Irtus Advisory Insight</p>
        <p class="insight-text">{_e(slide.strategic_insight)}</p>
      </footer>
    </article>"""


def _render_summary(summary: str) -> str:
    return f"""
    <section class="summary">
      <p class="summary-label">Strategic Advisory Summary</p>
      <blockquote class="summary-text">&ldquo;{_e(summary)}&rdquo;</blockquote>
    </section>"""


def render_deck_fragment(deck: GeneratedDeck) -> str:
    """Render only the slides and summary, for embedding in an existing page."""
    slides_html = "".join(_render_slide(s, i) for i, s in enumerate(deck.slides))
    return f'<div class="deck">{slides_html}{_render_summary(deck.advisory_summary)}\n</div>'


def render_pitch_deck(deck: GeneratedDeck, company_name: str) -> str:
    """Render a GeneratedDeck into a self-contained HTML page."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{_e(company_name)} - Irtus Generated Strategy</title>
<style>
*, *::before, *::after {{ box-sizing: border-box; margin: 0; padding: 0; }}

body {{
  font-family: system-ui, -apple-system, 'Segoe UI', sans-serif;
  background: #f8fafc; color: #0f172a;
  padding: clamp(24px, 4vw, 64px) 16px;
}}

.page {{ max-width: 896px; margin: 0 auto; }}
.page-header {{ margin-bottom: 48px; }}
.page-title {{ font-size: 30px; font-weight: 900; }}
.page-kicker {{
  color: #2563eb; font-weight: 700; font-size: 14px;
  text-transform: uppercase; letter-spacing: 0.05em;
}}

/* --- Slides --- */
.deck {{ display: grid; gap: 32px; }}
.slide {{
  background: #fff;
  border: 2px solid #f1f5f9;
  border-radius: 40px;
  padding: clamp(32px, 4vw, 48px);
}}
.slide-header {{ display: flex; justify-content: space-between; align-items: flex-start; margin-bottom: 24px; }}
.slide-number {{ color: #2563eb; font-weight: 900; font-size: 48px; opacity: 0.2; }}
.slide-badge {{
  background: #eff6ff; color: #1d4ed8;
  padding: 4px 12px; border-radius: 4px;
  font-size: 12px; font-weight: 700;
  text-transform: uppercase; letter-spacing: 0.1em;
}}
.slide-title {{ font-size: 24px; font-weight: 900; margin-bottom: 8px; }}
.slide-subtitle {{ color: #64748b; font-style: italic; margin-bottom: 24px; }}
.slide-points {{ list-style: none; margin-bottom: 32px; }}
.slide-points li {{ position: relative; padding-left: 18px; margin-bottom: 16px; color: #334155; line-height: 1.6; }}
.slide-points li::before {{
  content: ""; position: absolute; left: 0; top: 10px;
  width: 6px; height: 6px; border-radius: 50%; background: #2563eb;
}}
.slide-insight {{ padding-top: 24px; border-top: 1px solid #f1f5f9; }}
.insight-label {{
  font-size: 12px; font-weight: 700; color: #2563eb;
  text-transform: uppercase; letter-spacing: 0.1em; margin-bottom: 8px;
}}
.insight-text {{ color: #475569; font-size: 14px; line-height: 1.6; }}

/* --- Summary --- */
.summary {{
  background: #0f172a; color: #fff;
  padding: 40px; border-radius: 40px;
}}
.summary-label {{
  color: #60a5fa; font-weight: 700; font-size: 14px;
  text-transform: uppercase; letter-spacing: 0.1em; margin-bottom: 24px;
}}
.summary-text {{ font-size: 18px; color: #cbd5e1; line-height: 1.6; font-style: italic; }}
</style>
</head>
<body>
<main class="page">
  <header class="page-header">
    <h2 class="page-title">{_e(company_name)}</h2>
    <p class="page-kicker">Irtus Generated Strategy</p>
  </header>
  {render_deck_fragment(deck)}
</main>
</body>
</html>"""
