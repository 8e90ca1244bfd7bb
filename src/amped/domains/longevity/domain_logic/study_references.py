"""Per-metric evidence metadata.

Everything here depends only on the metric kind, never on a reading, so
identical kinds always carry identical explanations.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from amped.domains.longevity.domain_logic.metric_models import MetricKind, StudyReference


@dataclass(frozen=True)
class Evidence:
    confidence_label: str
    study: StudyReference
    basis: str

    @property
    def scientific_basis_text(self) -> str:
        return f"{self.basis} ({self.study.citation_tag})"


_STRESS_STUDY = StudyReference(
    title="Association between psychological distress and mortality: individual "
    "participant pooled analysis of 10 prospective cohort studies",
    authors="Russ TC, Stamatakis E, Hamer M, Starr JM, Kivimaki M, Batty GD",
    journal="BMJ",
    year=2012,
    doi="10.1136/bmj.e4933",
)

_EVIDENCE = MappingProxyType({
    MetricKind.STRESS: Evidence(
        confidence_label="limited",
        study=_STRESS_STUDY,
        basis="Pooled cohorts show a dose-response rise in all-cause mortality with "
        "psychological distress, even at sub-clinical levels",
    ),
    MetricKind.ANXIETY: Evidence(
        confidence_label="limited",
        study=_STRESS_STUDY,
        basis="Anxiety symptoms track psychological distress, which is associated "
        "with higher all-cause and cardiovascular mortality",
    ),
    MetricKind.NUTRITION: Evidence(
        confidence_label="moderate",
        study=StudyReference(
            title="Diet quality as assessed by the Healthy Eating Index, the Alternate "
            "Healthy Eating Index, the Dietary Approaches to Stop Hypertension score, "
            "and health outcomes",
            authors="Schwingshackl L, Hoffmann G",
            journal="Adv Nutr",
            year=2015,
            doi="10.3945/an.114.007617",
        ),
        basis="High diet-quality scores are associated with a 22% lower risk of "
        "all-cause mortality",
    ),
    MetricKind.SMOKING: Evidence(
        confidence_label="high",
        study=StudyReference(
            title="Smoking and mortality: beyond established causes",
            authors="Carter BD, Abnet CC, Feskanich D, Freedman ND, Hartge P",
            journal="JAMA",
            year=2015,
            doi="10.1001/jama.2015.1617",
        ),
        basis="Current smokers have two to three times the all-cause mortality of "
        "never smokers; risk falls steadily after quitting",
    ),
    MetricKind.ALCOHOL: Evidence(
        confidence_label="high",
        study=StudyReference(
            title="Risk thresholds for alcohol consumption: combined analysis of "
            "individual-participant data for 599 912 current drinkers in 83 "
            "prospective studies",
            authors="Wood AM, Kaptoge S, Butterworth AS, Willeit P, Warnakula S",
            journal="Lancet",
            year=2018,
            doi="10.1016/S0140-6736(18)30134-X",
        ),
        basis="All-cause mortality rises above roughly 100 g of alcohol per week "
        "with no protective threshold below it",
    ),
    MetricKind.SOCIAL_CONNECTION: Evidence(
        confidence_label="moderate",
        study=StudyReference(
            title="Social relationships and mortality risk: a meta-analytic review",
            authors="Holt-Lunstad J, Smith TB, Layton JB",
            journal="PLOS Med",
            year=2010,
            doi="10.1371/journal.pmed.1000316",
        ),
        basis="Stronger social relationships are associated with a 50% higher "
        "likelihood of survival across 148 studies",
    ),
    MetricKind.BLOOD_PRESSURE: Evidence(
        confidence_label="high",
        study=StudyReference(
            title="Age-specific relevance of usual blood pressure to vascular "
            "mortality: a meta-analysis of individual data for one million adults "
            "in 61 prospective studies",
            authors="Lewington S, Clarke R, Qizilbash N, Peto R, Collins R",
            journal="Lancet",
            year=2002,
            doi="10.1016/S0140-6736(02)11911-8",
        ),
        basis="Vascular mortality roughly doubles for every 20 mmHg of usual "
        "systolic pressure above 115 mmHg",
    ),
    MetricKind.SLEEP: Evidence(
        confidence_label="high",
        study=StudyReference(
            title="Sleep duration and all-cause mortality: a systematic review and "
            "meta-analysis of prospective studies",
            authors="Cappuccio FP, D'Elia L, Strazzullo P, Miller MA",
            journal="Sleep",
            year=2010,
            doi="10.1093/sleep/33.5.585",
        ),
        basis="Both short and long sleep are associated with higher mortality, "
        "with the lowest risk around 7 to 8 hours per night",
    ),
    MetricKind.ACTIVITY: Evidence(
        confidence_label="high",
        study=StudyReference(
            title="Association of step volume and intensity with all-cause "
            "mortality in older women",
            authors="Lee IM, Shiroma EJ, Kamada M, Bassett DR, Matthews CE, Buring JE",
            journal="JAMA Intern Med",
            year=2019,
            doi="10.1001/jamainternmed.2019.0899",
        ),
        basis="Mortality falls progressively with more daily steps up to about "
        "7,500 steps and levels off beyond",
    ),
    MetricKind.RESTING_HEART_RATE: Evidence(
        confidence_label="moderate",
        study=StudyReference(
            title="Resting heart rate and all-cause and cardiovascular mortality in "
            "the general population: a meta-analysis",
            authors="Zhang D, Shen X, Qi X",
            journal="Heart",
            year=2016,
            doi="10.1136/heartjnl-2015-308651",
        ),
        basis="Each 10 bpm increase in resting heart rate is associated with a "
        "9% higher risk of all-cause mortality",
    ),
    MetricKind.EXERCISE_MINUTES: Evidence(
        confidence_label="high",
        study=StudyReference(
            title="Leisure time physical activity and mortality: a detailed pooled "
            "analysis of the dose-response relationship",
            authors="Arem H, Moore SC, Patel A, Hartge P, Berrington de Gonzalez A",
            journal="JAMA Intern Med",
            year=2015,
            doi="10.1001/jamainternmed.2015.0533",
        ),
        basis="Meeting the 150 min/week guideline lowers all-cause mortality by "
        "about 20 to 30%, with diminishing returns beyond 300 min/week",
    ),
    MetricKind.HEART_RATE_VARIABILITY: Evidence(
        confidence_label="limited",
        study=StudyReference(
            title="Heart rate variability and first cardiovascular event in "
            "populations without known cardiovascular disease: meta-analysis and "
            "dose-response meta-regression",
            authors="Hillebrand S, Gast KB, de Mutsert R, Swenne CA, Jukema JW",
            journal="Europace",
            year=2013,
            doi="10.1093/europace/eus341",
        ),
        basis="Low heart rate variability is associated with a 32 to 45% higher "
        "risk of a first cardiovascular event",
    ),
    MetricKind.VO2_MAX: Evidence(
        confidence_label="moderate",
        study=StudyReference(
            title="Association of cardiorespiratory fitness with long-term mortality "
            "among adults undergoing exercise treadmill testing",
            authors="Mandsager K, Harb S, Cremer P, Phelan D, Nissen SE, Jaber W",
            journal="JAMA Netw Open",
            year=2018,
            doi="10.1001/jamanetworkopen.2018.3605",
        ),
        basis="Cardiorespiratory fitness is inversely associated with long-term "
        "mortality with no observed upper limit of benefit",
    ),
    MetricKind.BODY_MASS: Evidence(
        confidence_label="moderate",
        study=StudyReference(
            title="Body-mass index and all-cause mortality: individual-participant-"
            "data meta-analysis of 239 prospective studies in four continents",
            authors="Di Angelantonio E, Bhupathiraju SN, Wormser D, Gao P, Kaptoge S",
            journal="Lancet",
            year=2016,
            doi="10.1016/S0140-6736(16)30175-1",
        ),
        basis="All-cause mortality is lowest at a BMI of 20 to 25 and rises both "
        "below and above that range",
    ),
    MetricKind.ACTIVE_ENERGY: Evidence(
        confidence_label="moderate",
        study=StudyReference(
            title="Dose-response associations between accelerometry measured "
            "physical activity and sedentary time and all cause mortality: "
            "systematic review and harmonised meta-analysis",
            authors="Ekelund U, Tarp J, Steene-Johannessen J, Hansen BH, Jefferis B",
            journal="BMJ",
            year=2019,
            doi="10.1136/bmj.l4570",
        ),
        basis="Higher levels of total physical activity at any intensity are "
        "associated with substantially lower mortality",
    ),
    MetricKind.OXYGEN_SATURATION: Evidence(
        confidence_label="limited",
        study=StudyReference(
            title="Low oxygen saturation and mortality in an adult cohort: the Tromsø study",
            authors="Vold ML, Aasebo U, Wilsgaard T, Melbye H",
            journal="BMC Pulm Med",
            year=2015,
            doi="10.1186/s12890-015-0003-5",
        ),
        basis="Resting oxygen saturation of 95% or lower is associated with "
        "higher all-cause mortality in the general population",
    ),
})


def evidence_for(kind: MetricKind) -> Evidence:
    return _EVIDENCE[kind]
