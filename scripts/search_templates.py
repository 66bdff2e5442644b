import sys

from drafting.config import load_cfg, setup_logging
from tools.templates.factory import build_template_service


def main():
    query = " ".join(sys.argv[1:]) or "rent agreement"
    cfg = load_cfg()
    setup_logging(cfg)
    service = build_template_service(cfg)

    page = service.search_templates(query)
    print(f"{page.total_count} template(s) for '{query}'")
    for t in page.templates:
        print(f"- {t.id}: {t.title} ({t.language or '-'}, {t.doc_type})")

if __name__ == "__main__":
    main()
