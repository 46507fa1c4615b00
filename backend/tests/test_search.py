"""In-memory directory search: filter then sort."""
from healthconnect.routes.doctors.search import filter_doctors, search_doctors, sort_doctors
from healthconnect.schemas.doctor import DoctorQuery


def names(doctors):
    return [d.name for d in doctors]


def test_search_text_matches_specialty_case_insensitively(directory):
    result = search_doctors(directory, DoctorQuery(search_text="cardio"))
    assert names(result) == ["Dr. Sarah Johnson"]


def test_search_text_matches_name(directory):
    result = filter_doctors(directory, search_text="CHEN")
    assert names(result) == ["Dr. Michael Chen"]


def test_filter_result_is_ordered_subsequence(directory):
    # "o" appears in several names and specialties
    result = filter_doctors(directory, search_text="o")
    expected = [
        d for d in directory
        if "o" in d.specialty.lower() or "o" in d.name.lower()
    ]
    assert result == expected


def test_empty_search_text_returns_everything_in_order(directory):
    assert filter_doctors(directory, search_text="") == directory
    assert filter_doctors(directory) == directory


def test_region_filter_is_exact(directory):
    result = filter_doctors(directory, region="north")
    assert names(result) == ["Dr. Sarah Johnson", "Dr. Robert Taylor"]
    assert filter_doctors(directory, region="North") == []


def test_all_region_sentinel_disables_region_filter(directory):
    assert len(filter_doctors(directory, region="all")) == 6
    assert len(filter_doctors(directory, region=None)) == 6


def test_region_and_fee_high(directory):
    result = search_doctors(directory, DoctorQuery(region="north", sort="fee-high"))
    assert names(result) == ["Dr. Robert Taylor", "Dr. Sarah Johnson"]
    assert [d.consultation_fee for d in result] == [90, 75]


def test_search_and_region_are_combined(directory):
    result = search_doctors(directory, DoctorQuery(search_text="dr.", region="south"))
    assert names(result) == ["Dr. Michael Chen"]


def test_default_sort_is_rating_descending(directory):
    result = sort_doctors(directory)
    assert [d.rating for d in result] == [5.0, 4.9, 4.9, 4.8, 4.7, 4.6]
    # equal ratings keep input order
    assert names(result)[1:3] == ["Dr. Michael Chen", "Dr. Robert Taylor"]


def test_unknown_sort_key_falls_back_to_rating(directory):
    assert sort_doctors(directory, "popularity") == sort_doctors(directory, "rating")


def test_experience_sort(directory):
    result = sort_doctors(directory, "experience")
    assert [d.experience for d in result] == [20, 18, 15, 12, 10, 8]


def test_fee_low_and_fee_high_are_reversed(directory):
    low = sort_doctors(directory, "fee-low")
    high = sort_doctors(directory, "fee-high")
    assert [d.consultation_fee for d in low] == [40, 50, 60, 75, 80, 90]
    assert high == list(reversed(low))


def test_sorting_never_reintroduces_filtered_doctors(directory):
    result = search_doctors(directory, DoctorQuery(search_text="neuro", sort="fee-low"))
    assert names(result) == ["Dr. Robert Taylor"]


def test_source_list_is_not_mutated(directory):
    before = list(directory)
    search_doctors(directory, DoctorQuery(search_text="a", region="north", sort="fee-low"))
    assert directory == before
