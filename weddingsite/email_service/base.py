from abc import ABC, abstractmethod


class EmailServiceBase(ABC):
    @abstractmethod
    async def send_rsvp_invitation(
        self,
        to_address: str,
        guest_name: str,
        rsvp_url: str,
        portal_url: str,
    ) -> None:
        pass

    @abstractmethod
    async def send_rsvp_confirmation(
        self,
        to_address: str,
        guest_name: str,
        attending: str,
        party_size: int,
        message: str,
    ) -> None:
        pass

    @abstractmethod
    async def send_rsvp_reminder(
        self,
        to_address: str,
        guest_name: str,
        rsvp_url: str,
    ) -> None:
        pass
