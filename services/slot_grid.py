"""
요일 × 강의실 × 시간 슬롯 그리드 표시용 변환
"""
from utils.validators import time_to_minutes

DAYS = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday']


def find_cell(entries, day, room, slot):
    """해당 칸에 표시할 일정 (시작 시간이 슬롯과 정확히 일치해야 함)"""
    for entry in entries:
        if entry.get('day') == day and entry.get('room') == room and entry.get('start_time') == slot:
            return entry
    return None


def build_grid(entries, day, rooms, time_slots):
    """하루치 그리드: 슬롯별 행, 강의실별 칸 (빈 칸은 None)"""
    day_entries = [e for e in entries if e.get('day') == day]
    rows = []
    for slot in time_slots:
        rows.append({
            "time": slot,
            "cells": {room: find_cell(day_entries, day, room, slot) for room in rooms},
        })
    return {"day": day, "rooms": list(rooms), "rows": rows}


def sort_entries(entries, days=DAYS):
    """요일 순 → 시작 시간 순 정렬 (목록 보기용)"""
    order = {d: i for i, d in enumerate(days)}
    return sorted(
        entries,
        key=lambda e: (order.get(e.get('day'), len(order)), time_to_minutes(e.get('start_time', '00:00'))),
    )
