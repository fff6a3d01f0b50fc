from conftest import snap, snapshots

from tutor_copilot.analytics.governance import analyze_governance, governance_badge


def test_badges():
	assert governance_badge(70) == "strong"
	assert governance_badge(69.9) == "medium"
	assert governance_badge(40) == "medium"
	assert governance_badge(39.9) == "critical"
	assert governance_badge(0) == "critical"


def test_rows_sorted_by_score_with_components():
	rows = analyze_governance(
		snapshots(
			snap(1, "Alfa", governancaCorporativa=55, governancaCorporativa_totalDispensa=3),
			snap(2, "Beta", governancaCorporativa=82, governancaCorporativa_liberouRelatoriosFinanceirosHospitais=1),
			snap(3, "Gama"),
		)
	)
	assert [r.team for r in rows] == ["Beta", "Alfa", "Gama"]
	assert [r.badge for r in rows] == ["strong", "medium", "critical"]
	assert rows[0].transparency == 1
	assert rows[1].layoffs == 3
	assert rows[2].score == 0 and rows[2].infection_rate == 0


def test_empty_input():
	assert analyze_governance({}) == []
