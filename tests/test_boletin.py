import pytest

from boletin.infrastructure.models import MateriaORM, NotaORM


@pytest.fixture
def materias(db, seeded):
    """Subject ids in report order"""
    return [m.id for m in db.query(MateriaORM).order_by(MateriaORM.id).all()]


def _by_materia(rows):
    return {r["materiaId"]: r for r in rows}


def test_report_lists_every_subject_without_grades(client, alumno_headers, materias):
    response = client.get("/api/boletin/me", headers=alumno_headers)
    assert response.status_code == 200
    boletin = response.json()["boletin"]
    assert [r["materiaId"] for r in boletin] == materias
    assert boletin[0]["materiaNombre"] == "Matemáticas"
    assert all(r["notaId"] is None and r["informe1"] is None for r in boletin)


def test_save_and_read_report(client, profesor_headers, alumno_headers, seeded, materias):
    a, b = materias[:2]
    response = client.post("/api/boletin", headers=profesor_headers, json={
        "alumnoId": seeded["alumno"],
        "notas": [
            {"materiaId": a, "informe1": "TEA", "cuatri1": 8},
            {"materiaId": b, "nota_final": "7"},
        ],
    })
    assert response.status_code == 200

    rows = _by_materia(client.get("/api/boletin/me", headers=alumno_headers).json()["boletin"])
    assert rows[a]["informe1"] == "TEA"
    assert rows[a]["cuatri1"] == "8"
    # submitted record: absent slots are empty strings, not null
    assert rows[a]["informe2"] == ""
    assert rows[b]["nota_final"] == "7"
    assert rows[b]["notaId"] is not None
    # subject never submitted stays null
    assert rows[materias[2]]["notaId"] is None
    assert rows[materias[2]]["informe1"] is None


def test_resubmission_only_overwrites_submitted_subjects(client, admin_headers, seeded, materias):
    a, b, c = materias[:3]
    alumno = seeded["alumno"]
    first = [{"materiaId": m, "informe1": "TEP", "cuatri1": "6"} for m in (a, b, c)]
    assert client.post("/api/boletin", headers=admin_headers,
                       json={"alumnoId": alumno, "notas": first}).status_code == 200
    before = _by_materia(client.get(f"/api/boletin/{alumno}", headers=admin_headers).json()["boletin"])

    assert client.post("/api/boletin", headers=admin_headers, json={
        "alumnoId": alumno, "notas": [{"materiaId": a, "informe1": "TEA", "cuatri1": "9"}],
    }).status_code == 200
    after = _by_materia(client.get(f"/api/boletin/{alumno}", headers=admin_headers).json()["boletin"])

    assert after[a]["informe1"] == "TEA"
    assert after[a]["cuatri1"] == "9"
    assert after[a]["notaId"] == before[a]["notaId"]
    assert after[b] == before[b]
    assert after[c] == before[c]


def test_batch_with_unknown_subject_persists_nothing(client, admin_headers, seeded, materias, db):
    alumno = seeded["alumno"]
    response = client.post("/api/boletin", headers=admin_headers, json={
        "alumnoId": alumno,
        "notas": [
            {"materiaId": materias[0], "informe1": "TEA"},
            {"materiaId": materias[1], "informe1": "TEA"},
            {"materiaId": 9999, "informe1": "TEA"},
            {"materiaId": materias[2], "informe1": "TEA"},
        ],
    })
    assert response.status_code == 500
    assert "message" in response.json()

    rows = client.get(f"/api/boletin/{alumno}", headers=admin_headers).json()["boletin"]
    assert all(r["notaId"] is None for r in rows)
    assert db.query(NotaORM).count() == 0


def test_failed_batch_keeps_previous_values(client, admin_headers, seeded, materias):
    alumno = seeded["alumno"]
    a = materias[0]
    client.post("/api/boletin", headers=admin_headers,
                json={"alumnoId": alumno, "notas": [{"materiaId": a, "informe1": "TEP"}]})

    response = client.post("/api/boletin", headers=admin_headers, json={
        "alumnoId": alumno,
        "notas": [{"materiaId": a, "informe1": "TEA"}, {"materiaId": 9999}],
    })
    assert response.status_code == 500

    rows = _by_materia(client.get(f"/api/boletin/{alumno}", headers=admin_headers).json()["boletin"])
    assert rows[a]["informe1"] == "TEP"


def test_save_report_requires_student_and_notas(client, admin_headers, seeded):
    assert client.post("/api/boletin", headers=admin_headers,
                       json={"notas": []}).status_code == 400
    assert client.post("/api/boletin", headers=admin_headers,
                       json={"alumnoId": seeded["alumno"]}).status_code == 400
    assert client.post("/api/boletin", headers=admin_headers,
                       json={"alumnoId": seeded["alumno"], "notas": {"materiaId": 1}}).status_code == 400


def test_report_by_id_matches_own_report(client, admin_headers, alumno_headers, seeded, materias):
    client.post("/api/boletin", headers=admin_headers, json={
        "alumnoId": seeded["alumno"], "notas": [{"materiaId": materias[3], "rec_dic": "4"}],
    })
    own = client.get("/api/boletin/me", headers=alumno_headers).json()
    by_id = client.get(f"/api/boletin/{seeded['alumno']}", headers=admin_headers).json()
    assert own == by_id
