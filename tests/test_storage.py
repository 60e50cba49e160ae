"""
Tests for loading snapshots from CSV exports and the database
"""
import pytest
from osgb_analytics.core.db import create_tables, get_engine
from osgb_analytics.load.load_to_db import load_snapshot
from osgb_analytics.scripts.run_report import criteria_from_args, parse_args
from osgb_analytics.services.snapshot import load_from_csv, load_from_db


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def exports(tmp_path):
    companies = write(tmp_path / "companies.csv",
                      "id,name,contactPerson\n1,Acme Health,Ayse Demir\n2,Beta Build,\n\n")
    screenings = write(
        tmp_path / "screenings.csv",
        "id,companyId,participantName,date,timeStart,timeEnd,employeeCount,type,status,notes,createdAt\n"
        "1,1,Ali,2024-01-10,09:00,10:00,10,periodic,scheduled,,2024-01-01T08:00:00\n"
        "2,2,Veli,2024-01-10,9:30,10:30,5,initial,completed,first visit,\n"
        "3,7,Ghost,2024-01-10,09:00,10:00,5,initial,completed,,\n",
    )
    documents = write(
        tmp_path / "documents.csv",
        "id,title,fileName,category,status,expiryDate,uploadDate,companyId\n"
        "1,Health report,r.pdf,health_report,active,2024-01-25,2024-01-08T09:00:00,1\n",
    )
    return companies, screenings, documents


def test_load_from_csv(exports):
    """camelCase exports are cleaned and rows for unknown companies are dropped"""
    snap = load_from_csv(*exports)
    assert [c.name for c in snap.companies] == ["Acme Health", "Beta Build"]
    assert [s.id for s in snap.screenings] == [1, 2]
    assert snap.screening(2).time_start == "09:30"
    assert snap.screening(2).notes == "first visit"
    assert snap.screening(3) is None
    assert snap.documents[0].company_id == 1
    assert snap.company_map[1].contact_person == "Ayse Demir"


def test_missing_export_raises(tmp_path, exports):
    """A missing file is an error, not an empty snapshot"""
    with pytest.raises(FileNotFoundError):
        load_from_csv(tmp_path / "nope.csv", exports[1], exports[2])


def test_database_round_trip(snapshot):
    """Seeding and reading back gives the same screenings and companies"""
    engine = create_tables(get_engine("sqlite://"))
    create_tables(engine)
    stats = load_snapshot(snapshot, engine)
    assert stats == {"companies": 3, "screenings": 7, "documents": 4}

    back = load_from_db(engine)
    assert back.companies == snapshot.companies
    assert back.screenings == snapshot.screenings
    assert [d.id for d in back.documents] == [1, 2, 3, 4]
    assert back.documents[0].expiry_date == snapshot.documents[0].expiry_date
    assert back.documents[0].upload_date == snapshot.documents[0].upload_date


def test_report_cli_criteria():
    """Command line options become filter criteria"""
    args = parse_args(["--company", "2", "--start", "2024-01-01", "--end", "2024-01-31", "--search", "ali"])
    c = criteria_from_args(args)
    assert c.company_id == 2
    assert (c.date_start.day, c.date_end.day) == (1, 31)
    assert c.search_text == "ali"
    assert criteria_from_args(parse_args([])).is_active is False
    with pytest.raises(ValueError):
        criteria_from_args(parse_args(["--company", "acme"]))
