"""Basic usage example for the Studio Catalog service."""

from studio_catalog.logging_config import setup_logging
from studio_catalog.services import CatalogService
from studio_catalog.storage import Database


def print_catalog(catalog):
    for section in catalog:
        print(f"{section['position']}. {section['name']}")
        for category in section["categories"]:
            print(f"   {category['position']}. {category['name']}")
            for item in category["items"]:
                print(f"      {item['position']}. {item['name']}")


def main():
    """Build a small catalog, then rearrange it the way a drag-and-drop UI would."""
    setup_logging()

    # In-memory SQLite keeps the example self-contained
    db = Database("sqlite://")
    db.create_tables()

    with db.session() as session:
        service = CatalogService(session)

        weddings = service.create_section(name="Weddings", description="Ceremony and reception coverage")
        portraits = service.create_section(name="Portraits")
        packages = service.create_category(name="Packages", section_id=weddings.id)
        prints = service.create_category(name="Albums & Prints", section_id=weddings.id)
        headshots = service.create_category(name="Headshots", section_id=portraits.id)

        for name in ("Full Day", "Half Day", "Elopement"):
            service.create_item(name=name, category_id=packages.id)
        service.create_item(name="Fine Art Album", category_id=prints.id)
        retouching = service.create_item(name="Extra Retouching", category_id=headshots.id)

        print("Initial catalog:")
        print_catalog(service.get_catalog())

        # Drop "Portraits" above "Weddings"
        service.move_node({"itemId": portraits.id, "itemType": "section", "newParentId": "root", "newIndex": 0})

        # Drag "Albums & Prints" into "Portraits", ahead of "Headshots"
        service.move_node({"itemId": prints.id, "itemType": "category", "newParentId": portraits.id, "newIndex": 0})

        # Drag "Extra Retouching" to the end of "Albums & Prints"
        service.move_node({"itemId": retouching.id, "itemType": "item", "newParentId": prints.id, "newIndex": 99})

        print("\nAfter moves:")
        print_catalog(service.get_catalog())

    db.dispose()


if __name__ == "__main__":
    main()
