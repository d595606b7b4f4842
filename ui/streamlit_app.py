from datetime import date
from typing import List, Optional

import pandas as pd
import streamlit as st

from rx_companion.core.app_config import COMPANION_API_URL, PRESCRIPTION_API_URL
from rx_companion.core.logging_config import setup_logging
from rx_companion.schemas.models import SAFETY_NOTE, GuardianCreate, Medicine, MedicineCreate
from rx_companion.schemas.prescription import MedicineLine, NormalizedPrescription
from rx_companion.services import catalog
from rx_companion.services.dose_tracker import DoseTracker
from rx_companion.services.extraction_client import ExtractionClient
from rx_companion.services.guardian_store import GuardianStore
from rx_companion.services.medicine_store import MedicineStore, days_remaining
from rx_companion.services.medicine_sync import NOTHING_TO_SAVE, save_scanned_prescription
from rx_companion.services.prescription_pipeline import PrescriptionPipeline

setup_logging()

st.set_page_config(page_title="Medicine Companion", page_icon="💊", layout="centered")

# ---------------------------
# Config
# ---------------------------
API_BASE = st.sidebar.text_input("Companion API URL", value=COMPANION_API_URL)
OCR_BASE = st.sidebar.text_input("Prescription OCR URL", value=PRESCRIPTION_API_URL)

# ---------------------------
# Session state
# ---------------------------
if "medicines" not in st.session_state:
    st.session_state.medicines = MedicineStore()
if "guardians" not in st.session_state:
    st.session_state.guardians = GuardianStore()
if "doses" not in st.session_state:
    st.session_state.doses = DoseTracker()
if "scan_notice" not in st.session_state:
    st.session_state.scan_notice = None

def save_prescription(record: NormalizedPrescription) -> List[Medicine]:
    """Commit handler: send to the companion API, keep a local copy for this session."""
    outcome = save_scanned_prescription(record, st.session_state.medicines, API_BASE)
    st.session_state.scan_notice = outcome.notice
    return outcome.added

def get_pipeline() -> PrescriptionPipeline:
    pipeline = st.session_state.get("pipeline")
    if pipeline is None or pipeline.client.base_url != OCR_BASE.rstrip("/"):
        pipeline = PrescriptionPipeline(client=ExtractionClient(base_url=OCR_BASE), on_commit=save_prescription)
        st.session_state.pipeline = pipeline
    return pipeline

def lines_to_df(lines: List[MedicineLine]) -> pd.DataFrame:
    return pd.DataFrame([m.model_dump() for m in lines], columns=list(MedicineLine.model_fields))

def df_to_lines(df: pd.DataFrame) -> List[MedicineLine]:
    rows = df.astype(object).where(pd.notna(df), None).to_dict(orient="records")
    lines = []
    for row in rows:
        if not (row.get("name") or "").strip():
            continue
        lines.append(MedicineLine(
            name=row["name"].strip(),
            dosage_per_intake=row.get("dosage_per_intake") or "",
            daily_frequency=row.get("daily_frequency") or "",
            total_days=str(row.get("total_days") or ""),
            usage_instruction=row.get("usage_instruction") or None,
            effect=row.get("effect") or None,
        ))
    return lines

# ---------------------------
# UI
# ---------------------------
st.title("💊 내 약 관리")
st.caption("건강한 복약 습관")
st.sidebar.caption(SAFETY_NOTE)

tab_home, tab_meds, tab_scan, tab_guardians, tab_supps, tab_pharmacy = st.tabs(
    ["홈", "내 약", "처방전", "보호자", "영양제", "약국"]
)

medicines: MedicineStore = st.session_state.medicines
tracker: DoseTracker = st.session_state.doses

with tab_home:
    doses = tracker.today(medicines.list())
    prog = tracker.progress(doses)

    st.subheader("안녕하세요!")
    st.write(f"오늘의 복약 **{prog.taken}/{prog.total}**")
    st.progress(prog.rate if prog.total else 0.0)

    st.subheader("오늘의 약")
    if not doses:
        st.info("오늘 복용할 약이 없습니다.")
    for d in doses:
        c1, c2 = st.columns([3, 1])
        c1.write(f"**{d.med_name}**  ·  {d.time_local}")
        if d.taken:
            c2.success("완료")
        elif c2.button("복용 체크", key=f"take_{d.dose_id}"):
            tracker.mark_taken(d.dose_id, doses)
            st.rerun()

    st.subheader("다가오는 진료")
    for a in catalog.upcoming_appointments():
        st.write(f"{a.hospital} · {a.date} · D-{a.days_left}")

with tab_meds:
    meds = medicines.list()
    st.subheader("내 약 목록")
    st.caption(f"현재 복용 중인 약 {len(meds)}개")

    for m in meds:
        with st.container(border=True):
            left = days_remaining(m)
            st.write(f"**{m.name}** {m.dosage}")
            st.write(f"{m.frequency} · {', '.join(m.times) or '-'}")
            period = f"{m.start_date} ~ {m.end_date or ''}"
            if left is not None:
                period += f" ({left}일 남음)" if left >= 0 else " (복용 종료)"
            st.caption(period)
            if m.hospital:
                st.caption(m.hospital)
            if m.notes:
                st.caption(m.notes)
            if st.button("삭제", key=f"del_{m.id}"):
                medicines.delete(m.id)
                st.rerun()

    with st.expander("약 추가"):
        with st.form("add_medicine", clear_on_submit=True):
            name = st.text_input("약 이름")
            dosage = st.text_input("용량")
            frequency = st.text_input("복용 횟수", value="하루 1회")
            times = st.text_input("복용 시간 (쉼표로 구분)", value="08:00")
            start = st.date_input("시작일", value=date.today())
            end = st.date_input("종료일", value=None)
            hospital = st.text_input("병원")
            notes = st.text_input("메모")
            if st.form_submit_button("추가") and name.strip():
                medicines.add(MedicineCreate(
                    name=name.strip(),
                    dosage=dosage,
                    frequency=frequency,
                    times=[t.strip() for t in times.split(",") if t.strip()],
                    start_date=start.isoformat(),
                    end_date=end.isoformat() if end else None,
                    hospital=hospital,
                    notes=notes,
                ))
                st.rerun()

with tab_scan:
    pipeline = get_pipeline()
    state = pipeline.state

    st.subheader("처방전 스캔")
    st.caption("처방전 사진을 찍거나 업로드하여 약 정보를 자동으로 입력하세요")

    if st.session_state.scan_notice:
        st.info(st.session_state.scan_notice)

    if state.status == "IDLE" or state.image is None:
        if state.status == "FAILED" and state.error is not None:
            st.error(state.error.message)

        photo = st.camera_input("사진 촬영")
        upload = st.file_uploader("파일 업로드", type=["png", "jpg", "jpeg", "webp", "heic"])
        picked = photo or upload
        if picked is not None and st.button("처방전 분석", disabled=pipeline.processing):
            st.session_state.scan_notice = None
            with st.spinner("처방전 분석 중... 약 정보를 읽어오고 있습니다"):
                pipeline.scan(picked)
            st.rerun()

        with st.expander("촬영 팁"):
            st.markdown(
                "1. 처방전을 평평한 곳에 놓고 촬영하세요\n"
                "2. 글씨가 선명하게 보이도록 충분한 조명을 확보하세요\n"
                "3. 처방전 전체가 화면에 들어오도록 촬영하세요\n"
                "4. 그림자나 반사광이 없는지 확인하세요"
            )
    else:
        st.image(state.image.data, caption="스캔한 처방전", width="stretch")

        if state.status == "FAILED" and state.error is not None:
            st.error(f"분석 실패: {state.error.message}")
            c1, c2 = st.columns(2)
            if c1.button("다시 시도", disabled=not state.can_retry or pipeline.processing):
                with st.spinner("처방전 분석 중..."):
                    pipeline.retry()
                st.rerun()
            if c2.button("취소"):
                pipeline.reset()
                st.rerun()

        if state.status in ("PREVIEWING", "PROCESSING"):
            c1, c2 = st.columns(2)
            if c1.button("처방전 분석", key="scan_extract", disabled=pipeline.processing):
                st.session_state.scan_notice = None
                with st.spinner("처방전 분석 중..."):
                    pipeline.extract()
                st.rerun()
            if c2.button("다시 스캔", key="scan_reset"):
                pipeline.reset()
                st.rerun()

        if state.status == "SUCCEEDED" and state.result is not None:
            result = state.result
            st.success("스캔 완료! 처방전 정보를 확인하고 수정하세요")

            c1, c2 = st.columns(2)
            pharmacy_name = c1.text_input("약국명", value=result.pharmacy_name)
            dispensing_date = c2.text_input("조제일", value=result.dispensing_date)
            if result.pharmacy_address:
                st.text_input("약국 주소", value=result.pharmacy_address, disabled=True)
            if result.pharmacy_phone:
                st.text_input("약국 전화", value=result.pharmacy_phone, disabled=True)
            if result.prescribing_doctor:
                st.text_input("처방의", value=result.prescribing_doctor, disabled=True)
            if result.patient_name:
                st.text_input("환자명", value=result.patient_name, disabled=True)
            if result.total_amount is not None:
                st.write(f"총 금액: {result.total_amount:,.0f}원")
            if result.copayment is not None:
                st.write(f"본인부담금: {result.copayment:,.0f}원")

            st.write(f"### 처방 약품 ({len(result.medicines)}개)")
            edited_df = st.data_editor(
                lines_to_df(result.medicines),
                num_rows="dynamic",
                width="stretch",
                key="scan_editor",
            )

            c1, c2 = st.columns(2)
            if c1.button("내 약 목록에 추가", type="primary"):
                lines = df_to_lines(edited_df)
                if not lines:
                    # keep the scan so the user can add a row instead of starting over
                    st.warning(NOTHING_TO_SAVE)
                else:
                    edited = result.model_copy(update={
                        "pharmacy_name": pharmacy_name.strip() or result.pharmacy_name,
                        "dispensing_date": dispensing_date.strip() or result.dispensing_date,
                        "medicines": lines,
                    })
                    added = pipeline.commit(edited)
                    st.toast(f"약 {len(added)}개가 저장되었습니다!")
                    st.rerun()
            if c2.button("다시 스캔"):
                pipeline.reset()
                st.rerun()

with tab_guardians:
    guardians: GuardianStore = st.session_state.guardians
    st.subheader("보호자 관리")
    for g in guardians.list():
        with st.container(border=True):
            st.write(f"**{g.name}** ({g.relationship})")
            st.caption(f"{g.phone} · {g.email}")
            c1, c2, c3 = st.columns(3)
            if c1.toggle("복약 알림", value=g.notify_medicine, key=f"nm_{g.id}") != g.notify_medicine:
                guardians.toggle(g.id, "medicine")
                st.rerun()
            if c2.toggle("진료 알림", value=g.notify_appointment, key=f"na_{g.id}") != g.notify_appointment:
                guardians.toggle(g.id, "appointment")
                st.rerun()
            if c3.button("삭제", key=f"gdel_{g.id}"):
                guardians.delete(g.id)
                st.rerun()
            st.caption(f"진료 {g.notify_days_before}일 전 알림")

    with st.expander("보호자 추가"):
        with st.form("add_guardian", clear_on_submit=True):
            name = st.text_input("이름")
            relationship = st.text_input("관계")
            phone = st.text_input("전화번호")
            email = st.text_input("이메일")
            days_before = st.number_input("진료 알림 (일 전)", min_value=0, max_value=30, value=3)
            if st.form_submit_button("추가") and name.strip():
                guardians.add(GuardianCreate(
                    name=name.strip(),
                    relationship=relationship,
                    phone=phone,
                    email=email,
                    notify_days_before=int(days_before),
                ))
                st.rerun()

with tab_supps:
    st.subheader("영양제 추천")
    st.caption("중장년층에게 도움이 되는 영양제를 추천해드립니다")

    st.write("#### ⭐ 맞춤 추천")
    st.write(", ".join(f"{s.icon} {s.name}" for s in catalog.recommended()))

    labels = {c["id"]: f"{c['icon']} {c['name']}" for c in catalog.CATEGORIES}
    selected: Optional[str] = st.radio("분류", list(labels), format_func=labels.get, horizontal=True)
    for s in catalog.filter_by_category(selected or "all"):
        with st.container(border=True):
            st.write(f"{s.icon} **{s.name}**" + ("  ⭐" if s.recommended else ""))
            st.caption(s.description)
            st.write(" · ".join(s.benefits))
            st.caption(s.dosage)

with tab_pharmacy:
    st.subheader("주변 약국 찾기")
    st.caption("현재 위치: 서울시 강남구 역삼동")
    query = st.text_input("약국 이름이나 주소로 검색")
    found = catalog.search_pharmacies(query)
    if not found:
        st.info("검색 결과가 없습니다.")
    for p in found:
        with st.container(border=True):
            badges = ["영업중" if p.is_open else "영업종료"]
            if p.is_24_hours:
                badges.append("24시간")
            if p.has_parking:
                badges.append("주차가능")
            st.write(f"**{p.name}** · {p.distance}  ({', '.join(badges)})")
            st.caption(p.address)
            st.caption(f"{p.phone} · {p.hours}")
