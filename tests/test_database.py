from db.database import SCHEMA_PATH, DatabaseConfig, DatabaseManager, split_sql_statements


def test_config_from_env(monkeypatch):
    monkeypatch.setenv('DB_HOST', 'db.internal')
    monkeypatch.setenv('DB_PORT', '3307')
    monkeypatch.delenv('DB_NAME', raising=False)
    config = DatabaseConfig.from_env()

    assert config.host == 'db.internal'
    assert config.port == 3307
    assert config.database == 'esep_portal'
    assert config.pool_options()['pool_name'] == 'esep_pool'
    assert 'password' not in repr(config)


def test_manager_does_not_connect_on_creation():
    manager = DatabaseManager()
    assert manager._pool is None


def test_split_skips_comments():
    script = """
    -- first; not a statement
    CREATE TABLE a (id INT);
    INSERT INTO a VALUES (1);
    """
    assert split_sql_statements(script) == ["CREATE TABLE a (id INT)", "INSERT INTO a VALUES (1)"]


def test_schema_file_statements():
    statements = split_sql_statements(SCHEMA_PATH.read_text(encoding='utf-8'))
    created = [s for s in statements if s.startswith('CREATE TABLE')]
    assert len(created) == 4
    assert any('registrations' in s for s in created)
    assert len(statements) == 8
    assert sum(s.startswith("ALTER TABLE") and "utf8mb4_bin" in s for s in statements) == 2


def test_initialize_schema_runs_each_statement(monkeypatch):
    manager = DatabaseManager()
    executed = []
    monkeypatch.setattr(manager, 'execute_query', lambda query, *args, **kwargs: executed.append(query))

    assert manager.initialize_schema("CREATE TABLE a (id INT);\nCREATE TABLE b (id INT);") == 2
    assert executed == ["CREATE TABLE a (id INT)", "CREATE TABLE b (id INT)"]
