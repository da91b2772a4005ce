from schema_explorer import SchemaExplorer, create_explorer, get_explorer


def test_users_scenario(empty_db):
    explorer = create_explorer(empty_db)

    created = explorer.create_table("Users", {"Id": "INTEGER PRIMARY KEY", "Name": "TEXT"})
    added = explorer.add_column("Users", "Bio", "TEXT")
    repeated = explorer.add_column("Users", "Bio", "TEXT")

    assert created.success
    assert added.success
    assert not repeated.success

    lookup = explorer.get_table("Users")
    assert lookup.found
    assert lookup.table.column_names == ["Id", "Name", "Bio"]
    assert lookup.table.primary_keys == ["Id"]
    assert [table.name for table in explorer.list_tables()] == ["Users"]


def test_read_operations(db):
    explorer = SchemaExplorer(db)

    assert len(explorer.list_tables()) == 5
    assert len(explorer.list_relations()) == 3
    assert [view.name for view in explorer.list_views()] == ["active_customers", "customer_totals"]
    assert not explorer.get_table("Ghosts").found


def test_get_explorer_is_shared():
    assert get_explorer() is get_explorer()
