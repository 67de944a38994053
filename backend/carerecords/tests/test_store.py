# tests/test_store.py
import threading

from carerecords import main as cli
from carerecords.paths import ENTITY_FILES
from carerecords.store import RecordStore
from carerecords.validate_data import check_headers, validate_data_files


def _seed(store, patient, gp, consultant, surgery, hospital, referral):
    store.patients.add(patient)
    store.clinicians.add(gp)
    store.clinicians.add(consultant)
    store.facilities.add(surgery)
    store.facilities.add(hospital)
    store.referral_manager.add_referral(referral)
    store.save_all_data()


def test_referral_manager_built_once(resolver):
    store = RecordStore(resolver=resolver)
    seen = []

    def grab():
        seen.append(store.referral_manager)

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len({id(m) for m in seen}) == 1
    assert store.referral_manager is seen[0]


def test_save_then_load_all(store, resolver, codec, fixed_clock, patient, gp, consultant, surgery, hospital, make_referral):
    _seed(store, patient, gp, consultant, surgery, hospital, make_referral("R001"))

    for filename in ENTITY_FILES.values():
        assert (resolver.data_dir / filename).exists()

    fresh = RecordStore(resolver=resolver, codec=codec, clock=fixed_clock)
    counts = fresh.load_all_data()

    assert counts == {
        "patients": 1,
        "clinicians": 2,
        "facilities": 2,
        "appointments": 0,
        "prescriptions": 0,
        "staff": 0,
        "referrals": 1,
    }
    assert fresh.facilities.get_by_id("H001").capacity == 850

    summary = fresh.summary_frame()
    assert list(summary.columns) == ["entity", "records", "parse_warnings"]
    assert summary.set_index("entity").loc["clinicians", "records"] == 2


def test_generate_letter_by_id(store, patient, gp, consultant, surgery, hospital, make_referral):
    _seed(store, patient, gp, consultant, surgery, hospital, make_referral("R001"))

    path = store.generate_referral_letter("R001")
    assert "Name: James Whitfield" in path.read_text(encoding="utf-8")
    assert store.generate_referral_letter("R999") is None


def test_letter_with_dangling_references(store, make_referral):
    store.referral_manager.add_referral(make_referral("R001", patient_id="P404"))

    parties = store.resolve_letter_parties(store.referral_manager.get_referral_by_id("R001"))
    assert parties["patient"] is None

    path = store.generate_referral_letter("R001")
    assert "Name: \n" in path.read_text(encoding="utf-8")


def test_check_headers(store, resolver, write_entity, patient, gp, consultant, surgery, hospital, make_referral):
    _seed(store, patient, gp, consultant, surgery, hospital, make_referral("R001"))
    assert check_headers(resolver) == []

    write_entity("staff", [], header="staff_id,first_name,surname")
    (resolver.entity_file("appointments")).unlink()

    errors = check_headers(resolver)
    assert len(errors) == 2
    assert any(e.startswith("appointments:") and "not found" in e for e in errors)
    assert any(e.startswith("staff:") and "surname" in e for e in errors)


def test_validate_data_files_exit_codes(store, resolver, patient, gp, consultant, surgery, hospital, make_referral, capsys):
    assert validate_data_files(str(resolver.base_dir)) == 1

    _seed(store, patient, gp, consultant, surgery, hospital, make_referral("R001"))
    assert validate_data_files(str(resolver.base_dir)) == 0
    assert "validated successfully" in capsys.readouterr().out


def test_main_reports_missing_data(tmp_path):
    assert cli.main([str(tmp_path)]) == 1


def test_main_prints_summary(store, resolver, write_entity, patient, gp, consultant, surgery, hospital, make_referral, capsys):
    _seed(store, patient, gp, consultant, surgery, hospital, make_referral("R001"))
    write_entity("staff", ["ST001,Emma,Lewis,Receptionist,Front Desk,S001,0121,e@x.com,Part-time,08/03/2021,Helen,Standard"])

    assert cli.main([str(resolver.base_dir)]) == 0

    out = capsys.readouterr().out
    assert "referrals" in out
    assert "staff: ST001.start_date" in out
