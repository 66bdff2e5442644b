from __future__ import annotations
import asyncio

from drafting.api.factory import build_drafting_client
from drafting.config import load_cfg, setup_logging
from drafting.console import WizardConsole
from drafting.controller import DraftingWizardController
from tools.projects.factory import build_project_creator
from tools.templates.factory import build_template_service


async def run(cfg):
    profile = cfg.get("profile", {})
    creator = build_project_creator(cfg)
    controller = DraftingWizardController(
        client=build_drafting_client(cfg),
        user_id=profile.get("user_id", "guest"),
        profile=profile,
        client_name=(cfg.get("client") or {}).get("name", "LexDraft"),
        on_draft_success=creator,  # generated drafts are saved as projects
    )
    console = WizardConsole(controller, templates=build_template_service(cfg))

    print("AI Draft Console (type 'help' for commands, 'q' to quit)")
    while True:
        user_text = await asyncio.to_thread(input, "\nYou>")
        out = await console.handle(user_text)
        if out is None:
            print("Bye!")
            break
        print("\n" + out)
        if creator.last_project is not None:
            print(f"Saved as project {creator.last_project.get('id', '')}")
            creator.last_project = None


def main():
    cfg = load_cfg()
    setup_logging(cfg)
    try:
        asyncio.run(run(cfg))
    except (KeyboardInterrupt, EOFError):
        print("\nBye!")


if __name__ == "__main__":
    main()
