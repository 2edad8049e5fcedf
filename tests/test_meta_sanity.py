import importlib

def test_core_modules_and_symbols_exist():
    mods = [
        ("common.settings", ["load_settings", "Settings"]),
        ("common.logging_setup", ["setup_logging"]),
        ("ingestion.client", ["ChainClient", "decode_block_transactions"]),
        ("ingestion.errors", ["TransportFailure", "DecodeFailure"]),
        ("ingestion.indexer", ["AddressIndex"]),
        ("ingestion.models", ["Transaction"]),
    ]
    for mod_name, symbols in mods:
        mod = importlib.import_module(mod_name)
        for sym in symbols:
            assert hasattr(mod, sym), f"{mod_name} missing {sym}"
