from src.pointage_system.pointage_system.profiles.store import JsonFileProfileStore, Profile


def test_missing_file_loads_empty_profile(tmp_path):
    assert JsonFileProfileStore(tmp_path / "absent.json").load() == Profile()


def test_save_then_load(tmp_path):
    store = JsonFileProfileStore(tmp_path / "nested" / "profile.json")

    store.save(Profile(nom="Hélène", telephone="0611"))

    assert store.load() == Profile(nom="Hélène", telephone="0611")


def test_corrupt_file_loads_empty_profile(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonFileProfileStore(path).load() == Profile()


def test_hotel_is_not_remembered(tmp_path):
    path = tmp_path / "profile.json"
    path.write_text('{"nom": "Sara", "telephone": "0698", "hotel": "Ibis"}', encoding="utf-8")

    assert JsonFileProfileStore(path).load() == Profile(nom="Sara", telephone="0698")
