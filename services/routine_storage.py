"""
시간표 저장소 - Azure Cosmos DB 또는 로컬 JSON fallback
"""
import os
import json
import uuid
import logging
from datetime import datetime

from flask import current_app

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'routine_storage'

# 목록 조회에서 허용하는 필터 필드
FILTER_FIELDS = ('day', 'teacher', 'room', 'section', 'course_code')

# Cosmos 트랜잭션 배치 최대 작업 수
COSMOS_BATCH_LIMIT = 100


def _generate_entry_id():
    """고유 엔트리 ID 생성"""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    unique_id = str(uuid.uuid4())[:8]
    return f"entry_{timestamp}_{unique_id}"


def _matches(entry, filters):
    return all(entry.get(k) == v for k, v in filters.items())


def _clean_filters(filters):
    return {k: v for k, v in (filters or {}).items() if k in FILTER_FIELDS and v}


def create_storage(config):
    """설정에 따라 저장소 생성"""
    if config.get('COSMOS_DB_ENDPOINT') and config.get('COSMOS_DB_KEY'):
        return CosmosStorage(
            config['COSMOS_DB_ENDPOINT'],
            config['COSMOS_DB_KEY'],
            config['COSMOS_DATABASE_NAME'],
            config['COSMOS_CONTAINER_NAME'],
        )
    return LocalJsonStorage(config['ROUTINES_FILE'])


def get_storage():
    """현재 앱에 연결된 저장소 반환 (없으면 설정으로 생성)"""
    storage = current_app.extensions.get(EXTENSION_KEY)
    if storage is None:
        storage = create_storage(current_app.config)
        current_app.extensions[EXTENSION_KEY] = storage
    return storage


class LocalJsonStorage:
    """로컬 JSON 파일 기반 저장소 (개발용 fallback)"""

    kind = "local-json"

    def __init__(self, filepath):
        self.filepath = filepath
        os.makedirs(os.path.dirname(self.filepath), exist_ok=True)
        if not os.path.exists(self.filepath):
            self._save_data({"entries": []})
        logger.info("로컬 JSON 저장소 초기화 완료")

    def _load_data(self):
        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, FileNotFoundError):
            return {"entries": []}

    def _save_data(self, data):
        with open(self.filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def _ensure_entry_ids(self, data):
        """기존 엔트리에 ID가 없으면 자동 할당 (lazy migration)"""
        modified = False
        for entry in data.setdefault('entries', []):
            if not entry.get('id'):
                entry['id'] = _generate_entry_id()
                modified = True
        if modified:
            self._save_data(data)
        return data

    def list_entries(self, filters=None):
        """전체(또는 필터링된) 수업 일정 반환"""
        data = self._ensure_entry_ids(self._load_data())
        filters = _clean_filters(filters)
        return [e for e in data['entries'] if _matches(e, filters)]

    def get_entry(self, entry_id):
        for entry in self._load_data().get('entries', []):
            if entry.get('id') == entry_id:
                return entry
        return None

    def count_entries(self):
        return len(self._load_data().get('entries', []))

    def create_entry(self, entry):
        """수업 일정 추가"""
        data = self._load_data()
        if not entry.get('id'):
            entry['id'] = _generate_entry_id()
        data.setdefault('entries', []).append(entry)
        self._save_data(data)
        logger.info(f"수업 일정 추가: {entry['id']} / {entry.get('course_code')}-{entry.get('section')}")
        return entry['id']

    def create_entries(self, entries):
        """여러 일정을 한 번의 쓰기로 추가"""
        data = self._load_data()
        for entry in entries:
            if not entry.get('id'):
                entry['id'] = _generate_entry_id()
        data.setdefault('entries', []).extend(entries)
        self._save_data(data)
        logger.info(f"수업 일정 {len(entries)}개 일괄 저장")
        return [e['id'] for e in entries]

    def update_entry(self, entry_id, updates):
        """수업 일정 교체 (id 유지)"""
        data = self._load_data()
        for entry in data.get('entries', []):
            if entry.get('id') == entry_id:
                entry.update({k: v for k, v in updates.items() if k != 'id'})
                self._save_data(data)
                logger.info(f"수업 일정 수정: {entry_id}")
                return True
        return False

    def delete_entry(self, entry_id):
        """수업 일정 삭제"""
        data = self._load_data()
        original_len = len(data.get('entries', []))
        data['entries'] = [e for e in data.get('entries', []) if e.get('id') != entry_id]
        if len(data['entries']) < original_len:
            self._save_data(data)
            logger.info(f"수업 일정 삭제: {entry_id}")
            return True
        return False


class CosmosStorage:
    """Azure Cosmos DB 기반 저장소"""

    kind = "cosmos"
    PARTITION = 'entry'

    def __init__(self, endpoint, key, database_name, container_name):
        from azure.cosmos import CosmosClient, PartitionKey
        self.client = CosmosClient(endpoint, key)
        self.database = self.client.create_database_if_not_exists(id=database_name)
        self.container = self.database.create_container_if_not_exists(
            id=container_name,
            partition_key=PartitionKey(path="/type")
        )
        logger.info("Azure Cosmos DB 저장소 초기화 완료")

    @staticmethod
    def _to_entry(doc):
        """Cosmos 시스템 필드 제거"""
        return {k: v for k, v in doc.items() if not k.startswith('_') and k != 'type'}

    def _to_doc(self, entry):
        return {"type": self.PARTITION, **entry}

    def list_entries(self, filters=None):
        filters = _clean_filters(filters)
        query = "SELECT * FROM c WHERE c.type = 'entry'"
        parameters = []
        for field, value in filters.items():
            query += f" AND c.{field} = @{field}"
            parameters.append({"name": f"@{field}", "value": value})

        docs = self.container.query_items(
            query=query, parameters=parameters, partition_key=self.PARTITION
        )
        return [self._to_entry(d) for d in docs]

    def get_entry(self, entry_id):
        from azure.cosmos.exceptions import CosmosResourceNotFoundError
        try:
            doc = self.container.read_item(item=entry_id, partition_key=self.PARTITION)
        except CosmosResourceNotFoundError:
            return None
        return self._to_entry(doc)

    def count_entries(self):
        query = "SELECT VALUE COUNT(1) FROM c WHERE c.type = 'entry'"
        result = list(self.container.query_items(query=query, partition_key=self.PARTITION))
        return result[0] if result else 0

    def create_entry(self, entry):
        if not entry.get('id'):
            entry['id'] = _generate_entry_id()
        self.container.create_item(body=self._to_doc(entry))
        logger.info(f"수업 일정 추가: {entry['id']} / {entry.get('course_code')}-{entry.get('section')}")
        return entry['id']

    def create_entries(self, entries):
        """트랜잭션 배치로 저장 (배치 한도 단위로 분할)"""
        for entry in entries:
            if not entry.get('id'):
                entry['id'] = _generate_entry_id()

        for start in range(0, len(entries), COSMOS_BATCH_LIMIT):
            chunk = entries[start:start + COSMOS_BATCH_LIMIT]
            operations = [("create", (self._to_doc(e),)) for e in chunk]
            self.container.execute_item_batch(
                batch_operations=operations, partition_key=self.PARTITION
            )

        logger.info(f"수업 일정 {len(entries)}개 일괄 저장")
        return [e['id'] for e in entries]

    def update_entry(self, entry_id, updates):
        from azure.cosmos.exceptions import CosmosResourceNotFoundError
        try:
            doc = self.container.read_item(item=entry_id, partition_key=self.PARTITION)
        except CosmosResourceNotFoundError:
            return False

        doc.update({k: v for k, v in updates.items() if k not in ('id', 'type')})
        self.container.replace_item(item=entry_id, body=doc)
        logger.info(f"수업 일정 수정: {entry_id}")
        return True

    def delete_entry(self, entry_id):
        from azure.cosmos.exceptions import CosmosResourceNotFoundError
        try:
            self.container.delete_item(item=entry_id, partition_key=self.PARTITION)
        except CosmosResourceNotFoundError:
            return False
        logger.info(f"수업 일정 삭제: {entry_id}")
        return True
