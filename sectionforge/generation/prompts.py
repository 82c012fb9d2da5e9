"""Prompt and placeholder text for component generation.

Everything here is deterministic: the same inputs always give byte-identical
output.
"""

from __future__ import annotations

import json

MAX_MARKUP_CHARS = 50_000
PREVIEW_CHARS = 500

_PROMPT_TEMPLATE = """\
You are an expert Frontend Developer specialized in React and Tailwind CSS.
Your task is to convert the following raw HTML (scraped from a website) into a high-quality, production-ready React component.

**Instructions:**
1.  **Framework:** Use React (functional component) + Tailwind CSS.
2.  **Styling:** Use Tailwind utility classes accurately to replicate the look and feel. Make it responsive.
3.  **Icons:** If you see SVG icons or probable icon placeholders, use 'lucide-react' icons. Import them.
4.  **Images:** If there are <img> tags, use valid placeholders (like https://placehold.co/600x400) if the original src is relative or broken, otherwise keep the original src. Ensure <img> has alt tags.
5.  **Code Structure:**
    - Export default function Component().
    - Keep code clean and readable.
    - Use standard HTML tags (div, section, h1, p, button, etc.).
6.  **Interactivity:** If there are obvious interactive elements (dropdowns, mobile menus), implement basic state using `useState`.
7.  **Refinement:** The user provided these specific instructions: "{instructions}". Follow them strictly.

**Input HTML:**
```html
{html}
```

**Output Format:**
Return ONLY the raw code for the component. Do not add any explanation or prose.
Do not wrap it in markdown code blocks like ```tsx ... ```. Just the code.
Start directly with the import statements.
"""

_PLACEHOLDER_TEMPLATE = """\
import React from 'react';
import { AlertCircle } from 'lucide-react';

export default function MockComponent() {
  return (
    <div className="p-8 bg-yellow-50 border border-yellow-200 rounded-xl flex flex-col items-center text-center">
      <AlertCircle className="w-12 h-12 text-yellow-500 mb-4" />
      <h2 className="text-xl font-bold text-yellow-800 mb-2">API Key Missing</h2>
      <p className="text-yellow-700 max-w-md">
        Please add your GEMINI_API_KEY to the .env file to enable real AI generation.
      </p>
      <div className="mt-6 p-4 bg-white rounded shadow-sm text-left w-full max-w-lg overflow-hidden">
         <h3 className="font-bold text-gray-700 mb-2">Scraped HTML Preview:</h3>
         <pre className="text-xs text-gray-500 overflow-x-auto whitespace-pre-wrap">
           {__PREVIEW__}
         </pre>
      </div>
    </div>
  );
}"""


def build_prompt(html: str, instructions: str | None = None) -> str:
    """Return the generation prompt for *html*.

    Only the first :data:`MAX_MARKUP_CHARS` characters of *html* are
    embedded, with no truncation marker.  Empty or missing *instructions*
    become the literal ``None``.
    """
    return _PROMPT_TEMPLATE.format(
        instructions=instructions or "None",
        html=html[:MAX_MARKUP_CHARS],
    )


def build_refinement_instructions(instructions: str) -> str:
    return f"Refine the component. {instructions}. Preserve the general structure."


def build_placeholder_component(html: str) -> str:
    """Return the ``MockComponent`` shown when no model credential is available.

    The preview is a JSON string literal of the first :data:`PREVIEW_CHARS`
    characters of *html* with ``<`` and ``>`` written as unicode escapes, so
    it can never be parsed as live markup.
    """
    preview = (
        json.dumps(html[:PREVIEW_CHARS] + "...", ensure_ascii=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
    )
    return _PLACEHOLDER_TEMPLATE.replace("__PREVIEW__", preview)
