from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from .friends_models import FriendStatus

logger = logging.getLogger(__name__)

FRIEND_TABLE = "friend"


class FriendsRepository:
    """friend 테이블 접근. 관계는 sender -> receiver 방향을 가진다."""

    def __init__(self, client: Client):
        self.supabase = client

    async def find_relation(self, sender_id: int, receiver_id: int,
                            status: Optional[FriendStatus] = None) -> Optional[Dict[str, Any]]:
        """sender -> receiver 방향 관계 조회"""
        try:
            query = (
                self.supabase
                .table(FRIEND_TABLE)
                .select("*")
                .eq("sender_id", sender_id)
                .eq("receiver_id", receiver_id)
            )
            if status is not None:
                query = query.eq("status", status.value)
            response = query.limit(1).execute()
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"❌ 친구 관계 조회 오류: {e}")
            raise

    async def find_relation_between(self, user_id: int, other_id: int,
                                    status: Optional[FriendStatus] = None) -> Optional[Dict[str, Any]]:
        """방향과 관계없이 두 사용자 사이의 관계 조회"""
        relation = await self.find_relation(user_id, other_id, status)
        if relation:
            return relation
        return await self.find_relation(other_id, user_id, status)

    async def find_relations_of(self, user_id: int, status: FriendStatus) -> List[Dict[str, Any]]:
        """사용자가 보내거나 받은 관계 (관계 생성 순)"""
        try:
            sent = (
                self.supabase
                .table(FRIEND_TABLE)
                .select("*")
                .eq("sender_id", user_id)
                .eq("status", status.value)
                .execute()
            )
            received = (
                self.supabase
                .table(FRIEND_TABLE)
                .select("*")
                .eq("receiver_id", user_id)
                .eq("status", status.value)
                .execute()
            )
        except Exception as e:
            logger.error(f"❌ 친구 관계 목록 조회 오류: {e}")
            raise

        relations = (sent.data or []) + (received.data or [])
        relations.sort(key=lambda relation: relation["id"])
        return relations

    async def create(self, sender_id: int, receiver_id: int) -> Dict[str, Any]:
        try:
            response = self.supabase.table(FRIEND_TABLE).insert({
                "sender_id": sender_id,
                "receiver_id": receiver_id,
                "status": FriendStatus.PENDING.value,
            }).execute()
            if not response.data:
                raise Exception("친구 신청 저장 실패: response.data is empty")
            return response.data[0]
        except Exception as e:
            logger.error(f"❌ 친구 신청 생성 오류: {e}")
            raise

    async def update_status(self, relation_id: int, status: FriendStatus) -> None:
        try:
            self.supabase.table(FRIEND_TABLE).update({"status": status.value}).eq("id", relation_id).execute()
        except Exception as e:
            logger.error(f"❌ 친구 관계 상태 변경 오류: {e}")
            raise

    async def delete(self, relation_id: int) -> None:
        try:
            self.supabase.table(FRIEND_TABLE).delete().eq("id", relation_id).execute()
        except Exception as e:
            logger.error(f"❌ 친구 관계 삭제 오류: {e}")
            raise
