"""Domain service: Prompt Assembly.

Builds the single Markdown generation prompt stored on an order. The
layout is fixed:

    # Website generation request
    ## Site: <name>              (only when a site is attached)
    Site type: <type>
    ### Description
    <user description>
    ## Components
    ### <n>. <product name>      (one per item with any prompt text)
    Platform: <name>
    <product prompt template>
    <item prompt fragment>

Assembly is a pure function of its inputs: no catalog access, no AI
calls. Fragment text arrives already resolved by the reconciler.
"""

from __future__ import annotations

from collections.abc import Iterable

from storefront.domain.model.catalog import SiteConfiguration, SiteType
from storefront.domain.service.price_reconciler import ReconciledItem

TITLE = "# Website generation request"
COMPONENTS_HEADING = "## Components"


class PromptAssembler:

    def assemble(
        self,
        site: SiteConfiguration | None,
        items: Iterable[ReconciledItem],
        site_type: SiteType | None = None,
    ) -> str:
        """Return the prompt text; identical inputs give identical text."""
        sections: list[str] = [TITLE]

        if site is not None:
            sections.extend(self._site_section(site, site_type))

        components = [item for item in items if self._has_prompt(item)]
        if components:
            sections.append(COMPONENTS_HEADING)
            for position, item in enumerate(components, start=1):
                sections.extend(self._item_section(position, item))

        return "\n\n".join(sections) + "\n"

    # --- Sections -------------------------------------------------------------

    @staticmethod
    def _site_section(site: SiteConfiguration, site_type: SiteType | None) -> list[str]:
        blocks = [f"## Site: {site.name.strip()}"]
        if site_type is not None:
            blocks.append(f"Site type: {site_type.name.strip()}")
        description = site.description.strip()
        if description:
            blocks.append("### Description")
            blocks.append(description)
        return blocks

    @staticmethod
    def _item_section(position: int, item: ReconciledItem) -> list[str]:
        blocks = [f"### {position}. {item.product_name.strip()}"]
        if item.platform is not None:
            blocks.append(f"Platform: {item.platform.name.strip()}")
        if item.product_prompt.strip():
            blocks.append(item.product_prompt.strip())
        text = item.prompt_fragment.text.strip() if item.prompt_fragment else ""
        if text:
            blocks.append(text)
        return blocks

    @staticmethod
    def _has_prompt(item: ReconciledItem) -> bool:
        if item.product_prompt.strip():
            return True
        return item.prompt_fragment is not None and bool(item.prompt_fragment.text.strip())
